"""palette_swap.core: foundation layer.

Colour model, surfaces, the palette transform, palette files and reports.
Only stdlib, numpy, and PIL are allowed here.
"""
