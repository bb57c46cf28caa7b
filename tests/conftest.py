from __future__ import annotations

from typing import Mapping

import pytest

from prepmate.fetch import DocumentUnavailable


CURRENT_YEAR = 2026


class StaticFetcher:
    """In-memory stand-in for the HTTP fetcher."""

    def __init__(self, documents: Mapping[str, str] | None = None):
        self.documents = dict(documents or {})
        self.calls: list[str] = []

    def fetch(self, identifier: str) -> str:
        self.calls.append(identifier)
        if identifier not in self.documents:
            raise DocumentUnavailable(f"no document for {identifier}")
        return self.documents[identifier]

    def close(self) -> None:
        pass


CARLSEN_PROFILE = """
<html>
<head><title>Carlsen, Magnus - FIDE Ratings</title></head>
<body>
<div class="profile-standart profile-game"><p>2837</p><p>STANDARD</p></div>
<div class="profile-rapid profile-game"><p>2827</p><p>RAPID</p></div>
<script>
Highcharts.chart('chart', {
  xAxis: { categories: ['2023','2024','2025','2026'] },
  series: [{ name: 'Standard', data: [2830, 2831, 2832, 2837] }, { name: 'Rapid', data: [2820, 2830, 2825, 2827] }]
});
</script>
<p>Highest rating: 2882</p>
</body>
</html>
"""


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def carlsen_profile() -> str:
    return CARLSEN_PROFILE
