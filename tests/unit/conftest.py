from pathlib import Path

import pytest
from _pytest.nodes import Item


def pytest_collection_modifyitems(
    session: object, config: object, items: list[Item]
) -> None:
    """Mark all collected tests in this directory as 'unit'.

    Unit tests never parse PHP and can be selected with -m unit.
    """
    _ = (session, config)
    root = Path(__file__).resolve().parent
    for item in items:
        try:
            Path(str(item.fspath)).resolve().relative_to(root)
        except ValueError:
            continue
        item.add_marker(pytest.mark.unit)
