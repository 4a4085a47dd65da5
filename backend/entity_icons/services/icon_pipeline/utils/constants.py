# backend/entity_icons/services/icon_pipeline/utils/constants.py
"""
Icon Pipeline Constants
"""

from PIL import Image

# Resampling filter for every resize
ICON_RESAMPLE = Image.Resampling.LANCZOS

# Background used when flattening transparency for JPEG output
JPEG_BACKGROUND_COLOR = (255, 255, 255)

# Modes Pillow can write directly for each format
JPEG_WRITABLE_MODES = {"RGB", "L", "CMYK"}
PNG_WRITABLE_MODES = {"1", "L", "LA", "P", "RGB", "RGBA", "I"}

# Minimum edge length of any scaled image
MIN_SCALED_DIMENSION = 1
