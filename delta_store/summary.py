from __future__ import annotations

from typing import Sequence

import polars as pl

from delta_common.schema import WeaponCode

FRAME_SCHEMA = {
    "id": pl.Utf8,
    "mode": pl.Utf8,
    "name": pl.Utf8,
    "tier": pl.Utf8,
    "price": pl.Int64,
    "build": pl.Utf8,
    "code": pl.Utf8,
    "range": pl.Int64,
    "update_time": pl.Utf8,
    "source": pl.Utf8,
}


def codes_to_frame(codes: Sequence[WeaponCode]) -> pl.DataFrame:
    """One row per code; absent optionals become nulls."""

    return pl.DataFrame([code.to_dict() for code in codes], schema=FRAME_SCHEMA)


def summarize_codes(codes: Sequence[WeaponCode]) -> pl.DataFrame:
    """
    Counts per (source, mode) with priced/ranged coverage, ordered by source then mode.

    Columns: source, mode, code_count, priced_count, ranged_count.
    """

    frame = codes_to_frame(codes)
    if frame.is_empty():
        return pl.DataFrame(
            schema={
                "source": pl.Utf8,
                "mode": pl.Utf8,
                "code_count": pl.UInt32,
                "priced_count": pl.UInt32,
                "ranged_count": pl.UInt32,
            }
        )
    return (
        frame.group_by(["source", "mode"], maintain_order=True)
        .agg(
            [
                pl.len().alias("code_count"),
                pl.col("price").is_not_null().sum().cast(pl.UInt32).alias("priced_count"),
                pl.col("range").is_not_null().sum().cast(pl.UInt32).alias("ranged_count"),
            ]
        )
        .sort(["source", "mode"])
    )


def count_by_source(codes: Sequence[WeaponCode]) -> dict[str, int]:
    summary = summarize_codes(codes)
    if summary.is_empty():
        return {}
    totals = summary.group_by("source", maintain_order=True).agg(pl.col("code_count").sum())
    return {row["source"]: int(row["code_count"]) for row in totals.iter_rows(named=True)}
