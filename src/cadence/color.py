# SPDX-License-Identifier: MIT

OVERDUE_COLOR = "red"
DUE_SOON_COLOR = "dark_orange"
RUNNING_TIMER_COLOR = "spring_green"

# Read items stay listed but are de-emphasized
READ_COLOR = "bright_black"

GANTT_BAR_COLOR = "cornflower_blue"
GANTT_HIDDEN_COLOR = "grey23"
