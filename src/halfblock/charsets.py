# Block elements used for half-height rendering (U+2580-U+2588)
SPACE = " "
UPPER_HALF = "▀"  # fg paints the top pixel, bg the bottom
LOWER_HALF = "▄"
FULL_BLOCK = "█"

GLYPHS = SPACE + UPPER_HALF + LOWER_HALF + FULL_BLOCK

ESC = "\033"
RESET = f"{ESC}[0m"

# Only this exact alpha counts as lit
OPAQUE = 255
