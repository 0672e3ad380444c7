"""Readers for cached relation lists ("friends data" files).

Each file is named after an entity and holds one relation per line: ``> name``
for an outgoing relation, ``< name`` for an incoming one. Only local files are
read; fetching them is left to the caller.
"""
from pathlib import Path
from typing import List, Tuple, Union

OUTGOING = ">"
INCOMING = "<"


class MissingRelationDataError(LookupError):
    """Raised when no relation file exists for an entity."""

    def __init__(self, entity: str, path: Path):
        super().__init__(f"No data available for {entity} (expected {path})")
        self.entity = entity
        self.path = path


def parse_relations(text: str, direction: str) -> List[str]:
    """
    Extract the entities related to the file owner in one direction.

    Args:
        text: Contents of a relation file
        direction: OUTGOING or INCOMING

    Returns:
        Related entity names, in file order
    """
    result = []
    for line in text.split("\n"):
        line = line.rstrip("\r")
        if len(line) > 2 and line[0] == direction:
            result.append(line[2:])
    return result


def _entity_path(entity: str, data_dir: Union[str, Path]) -> Path:
    # Entity names come from file contents; they must name a file directly in data_dir.
    if entity in ("", ".", "..") or "/" in entity or "\\" in entity or Path(entity).name != entity:
        raise ValueError(f"Invalid entity name: {entity!r}")
    root = Path(data_dir).resolve()
    path = (root / entity).resolve()
    if path.parent != root:
        raise ValueError(f"Invalid entity name: {entity!r} resolves outside {root}")
    return path


def load_relations(entity: str, data_dir: Union[str, Path], direction: str) -> List[str]:
    """
    Read the relation file of one entity and keep one direction.

    Args:
        entity: Entity name; must be a plain file name inside data_dir
        data_dir: Directory holding one relation file per entity
        direction: OUTGOING or INCOMING

    Returns:
        Related entity names, in file order

    Raises:
        ValueError: If the name contains a path separator or leaves data_dir
        MissingRelationDataError: If data_dir has no file for the entity
    """
    path = _entity_path(entity, data_dir)
    if not path.is_file():
        raise MissingRelationDataError(entity, path)
    return parse_relations(path.read_text(encoding="utf-8"), direction)


def load_entity_tokens(user: str,
                       data_dir: Union[str, Path],
                       skip_missing: bool = False) -> Tuple[List[str], List[List[str]]]:
    """
    Build clustering input for the entities ``user`` points to.

    Every outgoing relation of ``user`` becomes one entity, described by its
    own incoming relations.

    Args:
        user: Entity whose outgoing relations are clustered
        data_dir: Directory holding one relation file per entity
        skip_missing: Skip entities without a relation file instead of raising (default: False)

    Returns:
        Tuple of (entity names, token lists), aligned by index
    """
    if not user:
        raise ValueError("user must be a non-empty entity name")

    names: List[str] = []
    token_lists: List[List[str]] = []
    for entity in load_relations(user, data_dir, OUTGOING):
        if entity == user:
            continue
        try:
            tokens = load_relations(entity, data_dir, INCOMING)
        except MissingRelationDataError as e:
            if not skip_missing:
                raise
            print(f"  Skipping {entity}: {e}")
            continue
        names.append(entity)
        token_lists.append(tokens)
    return names, token_lists
