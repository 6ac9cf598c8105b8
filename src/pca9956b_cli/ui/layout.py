"""Screen layout for the control panel.

Row/column positions of each region and the static template drawn once at
start-up. The template is 80 columns wide.
"""

START_LINE = 0
STATUS_LINE = 9
ERRORS_LINE = 10
SELECTED_LINE = 12
INFO_LINE = 14
INFO_COLUMN = 5

# Cursor parks at the end of the info line so echoed input cannot break the layout
CURSOR_LINE = 14
CURSOR_COLUMN = 78

LINE_DASHES = "-" * 79

TEMPLATE: tuple[str, ...] = (
    LINE_DASHES,
    "                         --- PCA9956B Controller ---",
    LINE_DASHES,
    " Select LED:  0-7 <q-i>  8-15 <a-k>  16-23 <z-,>  o (global)  p (none)",
    " Select operation:  Off <1>  On <2>  PWM <3>  PWMPlus <4>",
    " Select value:  5 Current  6 PWM",
    " Modify selected value: <up> <down>   Apply selected value: <space>",
    " Exit: <Esc>  Refresh All: <Enter>",
    LINE_DASHES,
    " Status:                                   Key: . Off  p PWM  + PWMPlus o On",
    " Errors:                                   Key: . None o Open s Short   x DNE",
    LINE_DASHES,
    "",
    LINE_DASHES,
    " ... ",
    LINE_DASHES,
)
