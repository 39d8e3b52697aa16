"""Starter .agentmap.toml template."""

DEFAULT_TOML = """\
# agentmap configuration
version = "1.0"

[scan]
# ignore = ["tests/*", "*.generated.ts"]
max_files = 10000          # larger trees produce an empty map
workers = 8
require_description = true # only map source files with a header comment

[diff]
enabled = false            # annotate definitions changed since `base`
base = "HEAD"
staged = false             # compare the index instead of the working tree

[output]
format = "yaml"            # yaml | json
max_defs = 25              # per file, before truncation
"""
