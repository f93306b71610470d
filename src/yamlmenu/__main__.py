from yamlmenu.cli import cli

cli()
