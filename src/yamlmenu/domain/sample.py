"""Bundled sample document used when no input file is given."""

SAMPLE_YAML = """
version: 3.4

menu:
    - item 1
    - item 2
    - item 3
    - item 4

start_commands:
    start_infra:
        path: /my/wonderful/path/to/a/compose/file.yml
        except: aws-cli

    check_status:
        path: /other/path/that/is/also/good/for/something
"""
