"""Upstream data preparation: read order and service CSVs and derive features."""
import logging
import os
from pathlib import Path

import pandas as pd

from shipmix.utils.project_root import PROJECT_ROOT

logger = logging.getLogger(__name__)

ORDER_NUMERIC = ['distance_to_destination_mi', 'days_to_deliver', 'package_cnt']
SERVICE_NUMERIC = ['cost_per_package', 'days_in_transit', 'miles_covered_per_day', 'total_miles']


def data_dir() -> Path:
    """Directory relative input files are resolved against."""
    return Path(os.getenv('SHIPMIX_DATA_DIR', PROJECT_ROOT / 'data'))


def resolve_input(path: str | Path) -> Path:
    path = Path(path)
    if path.is_absolute() or path.exists():
        return path
    return data_dir() / path


def load_orders(orders_file: str | Path) -> pd.DataFrame:
    """
    Read orders and derive ``days_to_deliver`` when it is not supplied.

    ``days_to_deliver`` is the number of whole days between
    ``date_ordered`` and ``promised_delivery_date``. Unparseable numbers and
    dates become nulls so the record is rejected later rather than failing
    the whole load.
    """
    csv_file_path = resolve_input(orders_file)
    logger.info(f"Loading orders from {csv_file_path}")

    df = pd.read_csv(csv_file_path, dtype={'order_id': str})

    for col in ('date_ordered', 'promised_delivery_date'):
        if col in df.columns:
            df[col] = pd.to_datetime(df[col], errors='coerce')

    for col in ORDER_NUMERIC:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors='coerce')

    if 'days_to_deliver' not in df.columns:
        df['days_to_deliver'] = derive_days_to_deliver(df)

    return df


def derive_days_to_deliver(orders_df: pd.DataFrame) -> pd.Series:
    """Days between order and promised delivery dates (null where either is missing)."""
    if not {'date_ordered', 'promised_delivery_date'} <= set(orders_df.columns):
        raise ValueError(
            "days_to_deliver needs date_ordered and promised_delivery_date columns"
        )
    delta = (
        pd.to_datetime(orders_df['promised_delivery_date'], errors='coerce')
        - pd.to_datetime(orders_df['date_ordered'], errors='coerce')
    )
    return delta.dt.days


def load_services(services_file: str | Path) -> pd.DataFrame:
    """
    Read the service catalog and derive ``total_miles`` when it is not supplied.

    Carrier names are stripped and lower-cased to match ``carrier_rank`` keys.
    """
    csv_file_path = resolve_input(services_file)
    logger.info(f"Loading services from {csv_file_path}")

    df = pd.read_csv(
        csv_file_path,
        dtype={'delivery_service': str, 'service_type': str}
    )

    for col in SERVICE_NUMERIC:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors='coerce')

    if 'delivery_service' in df.columns:
        df['delivery_service'] = df['delivery_service'].str.strip().str.lower()

    if 'total_miles' not in df.columns:
        df['total_miles'] = derive_total_miles(df)

    return df


def derive_total_miles(services_df: pd.DataFrame) -> pd.Series:
    """Maximum reach of a service: ``days_in_transit × miles_covered_per_day``."""
    if not {'days_in_transit', 'miles_covered_per_day'} <= set(services_df.columns):
        raise ValueError(
            "total_miles needs days_in_transit and miles_covered_per_day columns"
        )
    return services_df['days_in_transit'] * services_df['miles_covered_per_day']
