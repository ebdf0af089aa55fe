"""
Constants and configuration values for Filter Tool.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Sample limits for 8-bit images
CHANNEL_MIN_VALUE = 0
CHANNEL_MAX_VALUE = 255

# Default color range (three channel, keep everything)
DEFAULT_RANGE_MINIMUMS = (0, 0, 0)
DEFAULT_RANGE_MAXIMUMS = (255, 255, 255)
DEFAULT_RANGE_KEEP = True

# Edit menu values
CONTRAST_GAINS = (0.25, 0.5, 0.75, 0.9, 1.1, 1.25, 1.5, 2.0, 5.0, 10.0)
BRIGHTNESS_BIASES = (-50.0, -25.0, -10.0, -5.0, -1.0, 1.0, 5.0, 10.0, 25.0, 50.0)
REMOVABLE_CHANNELS = (0, 1, 2)
BLUR_SIZES = tuple(range(1, 11))
MORPHOLOGY_SIZES = tuple(range(2, 11))
DEFAULT_THRESHOLD = 128

# Menu names
MENU_SEPARATOR = "/"
MENU_COLOR_SPACE = "Color Space"
MENU_COLOR_RANGE = "Color Range"
MENU_CONTRAST = "Contrast"
MENU_BRIGHTNESS = "Brightness"
MENU_REMOVE_CHANNELS = "Remove Channels"
MENU_BLUR = "Blur"
MENU_GRAY_SCALE = "Gray Scale"
MENU_BLACK_WHITE = "Black & White"
MENU_DILATE = "Dilate"
MENU_ERODE = "Erode"
MENU_CONTOURS = "Contours"
MENU_EDIT = "Edit"

# Image grabbing
DEFAULT_IMAGE_URL = "http://10.8.68.11/jpg/1/image.jpg"
GRAB_TIMEOUT_SECONDS = 10.0

# File naming
DEFAULT_OUTPUT_FORMAT = "PNG"

# Preferences
PREFERENCES_DIR_NAME = ".filter_tool"
PREFERENCES_FILE_NAME = "preferences.json"
PREFERENCES_ENV_VAR = "FILTER_TOOL_PREFERENCES"

# Preference field names
FIELD_LAST_OPENED_FILE = "last_opened_file"
FIELD_LAST_SAVED_FILE = "last_saved_file"
FIELD_IMAGE_URL = "image_url"
