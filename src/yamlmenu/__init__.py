"""yamlmenu: typed YAML menu and start-command extraction with Rich output."""

__version__ = "0.1.0"
