"""Rating authorities and the identifier shapes routed to each of them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class RatingAuthority:
    code: str
    label: str
    id_patterns: Tuple[re.Pattern[str], ...]
    profile_url: str

    def match(self, identifier: str) -> Optional[str]:
        """Return the bare authority id when ``identifier`` has one of our shapes."""

        for pattern in self.id_patterns:
            found = pattern.fullmatch(identifier)
            if found:
                return found.group("pid")
        return None

    def url_for(self, player_id: str) -> str:
        return self.profile_url.format(player_id=player_id)


_AUTHORITIES: Dict[str, RatingAuthority] = {
    "USCF": RatingAuthority(
        code="USCF",
        label="US Chess Federation",
        id_patterns=(re.compile(r"(?P<pid>\d{7,8})"),),
        profile_url="https://www.uschess.org/msa/MbrDtlMain.php?{player_id}",
    ),
    "FIDE": RatingAuthority(
        code="FIDE",
        label="FIDE",
        id_patterns=(
            re.compile(r"fide_(?P<pid>\d+)", re.IGNORECASE),
            re.compile(r"(?P<pid>\d{6})"),
        ),
        profile_url="https://ratings.fide.com/profile/{player_id}",
    ),
}


def iter_authorities() -> Iterable[RatingAuthority]:
    """Return an iterator over all configured authorities."""

    return _AUTHORITIES.values()


def get_authority(code: str) -> RatingAuthority:
    """Fetch an authority by code, raising KeyError if missing."""

    key = code.upper()
    if key not in _AUTHORITIES:
        raise KeyError(f"No rating authority configured for code={code!r}")
    return _AUTHORITIES[key]


def resolve_authority(identifier: str) -> Optional[Tuple[RatingAuthority, str]]:
    """Route an identifier to the authority whose id shape it matches."""

    text = identifier.strip()
    for authority in _AUTHORITIES.values():
        player_id = authority.match(text)
        if player_id is not None:
            return authority, player_id
    return None


def is_valid_player_id(identifier: str) -> bool:
    return resolve_authority(identifier) is not None


AUTHORITY_LABELS: Mapping[str, str] = {code: a.label for code, a in _AUTHORITIES.items()}
