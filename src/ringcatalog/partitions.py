"""Partition (audience group) keys and the user-facing alias table."""

from __future__ import annotations

DEFAULT_PARTITION = "general"

KNOWN_PARTITIONS: tuple[str, ...] = (
    "general",
    "ring0",
    "ring1",
    "ring1_5",
    "ring1_6",
    "ring2",
    "ring3",
    "ring3_6",
    "ring3_9",
)

# user-facing label (lowercase) → canonical partition key
_ALIASES: dict[str, str] = {
    "r0": "ring0",
    "ring0": "ring0",
    "r1": "ring1",
    "ring1": "ring1",
    "r1.5": "ring1_5",
    "ring1.5": "ring1_5",
    "ring1_5": "ring1_5",
    "r1.6": "ring1_6",
    "ring1.6": "ring1_6",
    "ring1_6": "ring1_6",
    "r2": "ring2",
    "ring2": "ring2",
    "r3": "ring3",
    "ring3": "ring3",
    "r3.6": "ring3_6",
    "ring3.6": "ring3_6",
    "ring3_6": "ring3_6",
    "r3.9": "ring3_9",
    "ring3.9": "ring3_9",
    "ring3_9": "ring3_9",
    "r4": "general",
    "general": "general",
}


def normalize_partition(label: str) -> str:
    """Map a ring label such as ``"R1"`` or ``"ring1.5"`` to its partition key.

    Unknown labels are returned lower-cased and stripped.
    """
    key = label.strip().lower()
    return _ALIASES.get(key, key)
