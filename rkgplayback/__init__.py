"""Playback of Mario Kart Wii ghost inputs as GameCube controller state."""

__version__ = "0.1.0"
__all__ = ["padstatus", "yaz1", "rkg", "joybus"]