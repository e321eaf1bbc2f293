"""
Batch classification of recorded client snapshots.

Each row holds one first-load snapshot: user-agent, viewport size and touch
support. The output adds the classifier flags, the category the session would
anchor to and the width band the stabilizer would report for non-desktop
sessions.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np
import pandas as pd

from .classifier import classify, initial_category
from .config import DEFAULT_PROFILE, MOBILE_MAX_WIDTH, TABLET_MAX_WIDTH, RuleProfile
from .parser import UserAgentParser
from .types import Category, EnvironmentSignals

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('user_agent', 'viewport_width')

_TRUE_STRINGS = {'1', 'true', 'yes', 'y', 't'}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return False
    return bool(value)


def load_records(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load recorded snapshots from CSV.

    Args:
        path: CSV file with at least user_agent and viewport_width columns

    Returns:
        DataFrame with user_agent, viewport_width, viewport_height and touch

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If required columns are missing or the file has no rows
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")

    df = pd.read_csv(path)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Records file missing columns: {', '.join(missing)}")
    if df.empty:
        raise ValueError("Records file contains no rows")

    if 'viewport_height' not in df.columns:
        df['viewport_height'] = 0
    if 'touch' not in df.columns:
        df['touch'] = False

    df['user_agent'] = df['user_agent'].fillna('').astype(str)
    df['viewport_width'] = pd.to_numeric(df['viewport_width'], errors='coerce').fillna(0).astype(int)
    df['viewport_height'] = pd.to_numeric(df['viewport_height'], errors='coerce').fillna(0).astype(int)
    df['touch'] = df['touch'].map(_as_bool)

    logger.info(f"Loaded {len(df)} records from {path}")
    return df


def width_bands(widths: Any) -> np.ndarray:
    """Vectorized width -> category value ('mobile', 'tablet', 'desktop')."""
    widths = np.asarray(widths)
    return np.select(
        [widths < MOBILE_MAX_WIDTH, widths < TABLET_MAX_WIDTH],
        [Category.MOBILE.value, Category.TABLET.value],
        default=Category.DESKTOP.value,
    )


def classify_records(df: pd.DataFrame,
                     parser: Optional[UserAgentParser] = None,
                     profile: RuleProfile = DEFAULT_PROFILE) -> pd.DataFrame:
    """
    Classify every snapshot in a DataFrame.

    Args:
        df: Records as returned by load_records
        parser: Optional user-agent parser (defaults to UserAgentParser)
        profile: Rule parameters

    Returns:
        Copy of df with classification columns appended
    """
    if df.empty:
        raise ValueError("df cannot be empty")

    parser = parser or UserAgentParser()
    out = df.copy()
    if 'viewport_height' not in out.columns:
        out['viewport_height'] = 0
    if 'touch' not in out.columns:
        out['touch'] = False

    rows = []
    for record in out[['user_agent', 'viewport_width', 'viewport_height', 'touch']].itertuples(index=False):
        user_agent = record.user_agent if isinstance(record.user_agent, str) else ''
        signals = EnvironmentSignals.build(
            user_agent=user_agent,
            parsed=parser.parse(user_agent),
            is_touch_capable=_as_bool(record.touch),
            viewport_width=record.viewport_width,
            viewport_height=record.viewport_height,
        )
        result = classify(signals, profile)
        rows.append({
            'os_name': signals.os_name,
            'cpu_architecture': signals.cpu_architecture,
            'is_definitely_desktop': result.is_definitely_desktop,
            'is_mobile_device': result.is_mobile_device,
            'is_tablet_device': result.is_tablet_device,
            'initial_category': initial_category(result).value,
            'evidence': (result.desktop_evidence if result.is_definitely_desktop
                         else result.tablet_evidence if result.is_tablet_device
                         else result.mobile_evidence).value,
        })

    results = pd.DataFrame(rows, index=out.index)
    out = pd.concat([out, results], axis=1)
    out['width_band'] = width_bands(out['viewport_width'].to_numpy())

    conflicts = int((out['is_mobile_device'] & out['is_tablet_device']).sum())
    if conflicts:
        logger.debug(f"{conflicts} records matched both mobile and tablet rules")
    return out


def summarize(classified: pd.DataFrame) -> pd.Series:
    """Record counts per initial category, in desktop/tablet/mobile order."""
    order = [c.value for c in Category]
    return classified['initial_category'].value_counts().reindex(order, fill_value=0)
