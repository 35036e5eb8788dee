from .loudness import (
    ABSOLUTE_GATE_LUFS,
    Loudness,
    block_bounds,
    block_count,
    block_energies,
    gated_loudness,
)

__all__ = [
    "ABSOLUTE_GATE_LUFS",
    "Loudness",
    "block_bounds",
    "block_count",
    "block_energies",
    "gated_loudness",
]
