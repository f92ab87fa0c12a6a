"""
Input source implementations.

The pygame keyboard/mouse source is imported from its own module so that
headless code never has to import pygame.
"""

from arcadesim.input.sources.base import InputSource
from arcadesim.input.sources.scripted import ScriptedInputSource

__all__ = ['InputSource', 'ScriptedInputSource']
