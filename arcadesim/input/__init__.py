"""
Input layer for arcadesim.

Sources turn raw host events into InputEvent values that the engine
consumes through ArcadeEngine.handle_input().
"""

from arcadesim.input.input_event import InputEvent, InputKind

__all__ = ['InputEvent', 'InputKind']
