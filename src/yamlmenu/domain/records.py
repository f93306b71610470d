"""Menu and start-command records built from a parsed document.

Expected document shape::

    version: 3.4
    menu:
      - item 1
    start_commands:
      <name>:
        path: /some/path
        except: optional-value

All models use Pydantic with frozen config for immutability.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field

from yamlmenu.domain.errors import SelectorOverflowError
from yamlmenu.domain.extract import (
    get_child,
    get_optional_string,
    map_mapping,
    map_sequence,
    to_string,
)
from yamlmenu.domain.nodes import MappingNode, Node

SELECTORS = "0123456789abcdefghijklmnopqrstuvwxyz"

VERSION_KEY = "version"
MENU_KEY = "menu"
START_COMMANDS_KEY = "start_commands"


class MenuItem(BaseModel):
    """One selectable menu entry."""

    model_config = {"frozen": True}

    selector: str = Field(min_length=1, max_length=1)
    label: str


class StartCommand(BaseModel):
    """A named command with its path and optional exclusion.

    ``except`` is a Python keyword, so the field is ``except_`` and
    serializes under the ``except`` alias.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    name: str
    path: str
    except_: str | None = Field(default=None, alias="except")


def make_menu_item(index: int, node: Node) -> MenuItem:
    """Build a MenuItem whose selector is the *index*-th selector character.

    Raises:
        SelectorOverflowError: *index* is past the end of ``SELECTORS``.
        TypeMismatchError: *node* is not a scalar.
    """
    if not 0 <= index < len(SELECTORS):
        raise SelectorOverflowError(index, len(SELECTORS))
    return MenuItem(selector=SELECTORS[index], label=to_string(node))


def make_start_command(name: str, node: Node) -> StartCommand:
    return StartCommand(
        name=name,
        path=to_string(get_child("path", node)),
        except_=get_optional_string("except", node),
    )


def read_version(root: MappingNode) -> str | None:
    """Return the document version, or ``None`` when it is absent.

    Callers decide what absence means; this never terminates the process.
    """
    return get_optional_string(VERSION_KEY, root)


def read_menu(root: MappingNode) -> Iterator[MenuItem]:
    return map_sequence(make_menu_item, get_child(MENU_KEY, root))


def read_start_commands(root: MappingNode) -> Iterator[StartCommand]:
    return map_mapping(make_start_command, get_child(START_COMMANDS_KEY, root))
