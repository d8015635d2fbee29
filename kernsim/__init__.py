"""A small hobby kernel simulated in Python: multiboot structures, VGA text screen, device file system and console output."""

__version__ = "0.1.0"