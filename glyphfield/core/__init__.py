"""Core rendering primitives for glyphfield.

Modules:
- fields: named scalar fields of position and time
- pointer: pointer-driven perturbation of field values
- palettes: glyph palettes and presets
- quantize: field value -> palette glyph
- raster: whole-frame rendering to text
- clock: frame counter driven by a display-refresh scheduler
"""
