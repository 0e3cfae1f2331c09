from __future__ import annotations

from dataclasses import asdict
from typing import Dict, List

import numpy as np
import pandas as pd

from models.scanner import RankedStock
from services.money_flow import SymbolAccumulator


def coverage_floor(sessions_fetched: int, target: int = 5, min_days: int = 3) -> int:
    return max(min_days, min(target, sessions_fetched))


def liquidity_score(cmf: float, total_traded_value: float, weight: float = 0.15) -> float:
    return cmf * (1 + weight * np.log10(1 + total_traded_value))


def rank_accumulators(
    accumulators: Dict[str, SymbolAccumulator],
    sessions_fetched: int,
    target: int = 5,
    min_days: int = 3,
    top_n: int = 10,
    liquidity_weight: float = 0.15,
) -> List[RankedStock]:
    """Score qualifying symbols by CMF boosted by traded value and return the top ``top_n``.

    Equal scores are ordered by symbol so the output does not depend on insertion order.
    """
    if not accumulators:
        return []

    df = pd.DataFrame([asdict(a) for a in accumulators.values()])
    df = df[df['days'] >= coverage_floor(sessions_fetched, target, min_days)].copy()
    if df.empty:
        return []

    volume = df['sum_volume'].to_numpy(dtype=float)
    df['cmf'] = np.divide(df['sum_mf_volume'].to_numpy(dtype=float), volume,
                          out=np.zeros(len(df)), where=volume != 0)

    first = pd.to_numeric(df['first_close'], errors='coerce').to_numpy(dtype=float)
    last = pd.to_numeric(df['last_close'], errors='coerce').to_numpy(dtype=float)
    valid = (first > 0) & (last > 0)
    df['price_change_pct'] = np.divide(last - first, first,
                                       out=np.zeros(len(df)), where=valid) * 100

    df['score'] = liquidity_score(df['cmf'].to_numpy(), df['sum_traded_value'].to_numpy(dtype=float), liquidity_weight)
    df = df.sort_values(['score', 'symbol'], ascending=[False, True], kind='mergesort')
    if top_n and top_n > 0:
        df = df.head(top_n)

    return [
        RankedStock(
            symbol=row.symbol,
            cmf=float(row.cmf),
            total_traded_value=float(row.sum_traded_value),
            total_volume=float(row.sum_volume),
            days_count=int(row.days),
            price_change_5d_percent=float(row.price_change_pct),
        )
        for row in df.itertuples(index=False)
    ]
