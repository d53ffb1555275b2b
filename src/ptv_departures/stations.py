from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

# Stop ids for the Mernda line, keyed by the names users ask for.
STATIONS: Mapping[str, int] = MappingProxyType(
    {
        "bell": 1019,
        "clifton_hill": 1041,
        "collingwood": 1043,
        "croxton": 1047,
        "epping": 1063,
        "flagstaff": 1068,
        "flinders_street": 1071,
        "hawkstowe": 1227,
        "jolimont-mcg": 1104,
        "keon_park": 1109,
        "lalor": 1112,
        "melbourne_central": 1120,
        "mernda": 1228,
        "merri": 1125,
        "middle_gorge": 1226,
        "north_richmond": 1145,
        "northcote": 1147,
        "parliament": 1155,
        "preston": 1159,
        "regent": 1160,
        "reservoir": 1161,
        "rushall": 1170,
        "ruthven": 1171,
        "south_morang": 1224,
        "southern cross": 1181,
        "thomastown": 1192,
        "thornbury": 1193,
        "victoria_park": 1201,
        "west_richmond": 1207,
    }
)


def get_stop_id(name: str) -> Optional[int]:
    """Return the PTV stop id for an exact station name, or ``None``."""

    return STATIONS.get(name)


def normalise_station_name(text: str) -> str:
    """Map free text such as ``"Flinders Street"`` onto a key of ``STATIONS``.

    Text that matches no key is returned lower-cased, so the lookup still
    reports the name the user typed.
    """

    name = " ".join(text.split()).lower()
    for candidate in (name, name.replace(" ", "_"), name.replace("_", " ")):
        if candidate in STATIONS:
            return candidate
    return name
