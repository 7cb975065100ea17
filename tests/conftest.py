from __future__ import annotations

from collections import Counter
from typing import List

import pytest


@pytest.fixture(autouse=True)
def _quiet_host_tracebacks(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's KITE_DEBUG_PY_TRACE from leaking into stderr checks."""
    monkeypatch.delenv("KITE_DEBUG_PY_TRACE", raising=False)


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: List[pytest.Item],
) -> None:
    """Scenario ids are hand-written; two identical ids would shadow a case."""
    del session, config

    counts = Counter(item.nodeid for item in items)
    clashes = sorted(nodeid for nodeid, seen in counts.items() if seen > 1)

    if clashes:
        listing = "\n".join(f"  {nodeid} (x{counts[nodeid]})" for nodeid in clashes)
        raise pytest.UsageError(f"scenario ids must be unique; repeated:\n{listing}")
