"""Starter .gli-editor.toml template."""

CONFIG_FILENAME = ".gli-editor.toml"

DEFAULT_TOML = """\
# gli-editor configuration
version = "1.0"

[editor]
context = 3               # lines of context around --lines N
scroll_margin = 3         # rows kept between the cursor and the window edge
read_only = false

[backup]
enabled = true            # copy the file to <name>.backup.<timestamp> before each save
max_backups = 5

[preview]
enabled = true            # show the source lines a fingerprint points at
context = 10

[output]
format = "terminal"       # terminal | json
"""
