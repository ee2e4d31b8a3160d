import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Dict

import numpy as np
import pandas as pd

from shipmix.config.parameters import Parameters
from shipmix.utils.project_root import PROJECT_ROOT

logger = logging.getLogger(__name__)

EXTENSIONS = {'excel': '.xlsx', 'json': '.json', 'csv': '.csv'}


def results_dir() -> Path:
    return Path(os.getenv('SHIPMIX_RESULTS_DIR', PROJECT_ROOT / 'results'))


def save_assignment_results(
    solution: Dict,
    parameters: Parameters,
    filename: str | Path = None,
    format: str = 'excel'
) -> Path:
    """Save assignment results to an Excel, JSON or CSV file.

    Returns:
        Path of the written file.
    """
    if format not in EXTENSIONS:
        raise ValueError(f"Unsupported format: {format!r}")

    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = results_dir() / f"assignment_results_{timestamp}{EXTENSIONS[format]}"

    filename = Path(filename)
    filename.parent.mkdir(parents=True, exist_ok=True)

    summary_metrics = [
        ('Total Shipping Cost ($)', f"{solution['total_shipping_cost']:,.2f}"),
        ('Orders', solution['orders_total']),
        ('Orders Assigned', solution['orders_assigned']),
        ('Orders Unassigned', solution['orders_unassigned']),
        ('Orders Rejected', solution['orders_rejected']),
    ]
    for carrier, count in solution['carriers_used'].items():
        summary_metrics.append((f'Orders via {carrier}', count))

    summary_metrics.extend([
        ('---Parameters---', ''),
        ('Optimizer', parameters.optimizer),
        ('Orders File', parameters.orders_file),
        ('Services File', parameters.services_file),
        ('Fail On Unassigned', parameters.fail_on_unassigned),
    ])
    for carrier, rank in sorted(parameters.carrier_rank.items(), key=lambda item: item[1]):
        summary_metrics.append((f'Carrier Rank {carrier}', rank))

    carrier_usage = pd.DataFrame(
        list(solution['carriers_used'].items()),
        columns=['Carrier', 'Orders']
    )

    data = {
        'summary_metrics': summary_metrics,
        'assignments': solution['assignments'],
        'candidates': solution['candidates'],
        'infeasible': solution['infeasible'],
        'rejected_orders': solution['rejected_orders'],
        'carrier_usage': carrier_usage,
        'execution_details': {
            'Execution Time (s)': solution['runtime_sec'],
            'Solver': solution['solver_name'],
            'Optimizer': solution['optimizer'],
        }
    }

    try:
        if format == 'json':
            _write_to_json(filename, data)
        elif format == 'csv':
            solution['assignments'].to_csv(filename, index=False)
        else:
            _write_to_excel(filename, data)
    except Exception as e:
        logger.error(f"Error saving results to {filename}: {e}")
        raise

    return filename


def _write_to_excel(filename: Path, data: dict) -> None:
    """Write assignment results to an Excel workbook."""
    with pd.ExcelWriter(filename, engine='openpyxl') as writer:
        pd.DataFrame(data['summary_metrics'], columns=['Metric', 'Value']).to_excel(
            writer, sheet_name='Solution Summary', index=False
        )
        _excel_safe(data['assignments']).to_excel(
            writer, sheet_name='Assignments', index=False
        )
        data['candidates'].to_excel(writer, sheet_name='Candidates', index=False)
        data['infeasible'].to_excel(writer, sheet_name='Infeasible', index=False)
        data['rejected_orders'].to_excel(writer, sheet_name='Rejected Orders', index=False)
        data['carrier_usage'].to_excel(writer, sheet_name='Carrier Usage', index=False)
        pd.DataFrame([data['execution_details']]).to_excel(
            writer, sheet_name='Execution Details', index=False
        )


def _excel_safe(df: pd.DataFrame) -> pd.DataFrame:
    """Drop timezone info, which openpyxl cannot store."""
    df = df.copy()
    for col in df.select_dtypes(include=['datetimetz']).columns:
        df[col] = df[col].dt.tz_localize(None)
    return df


def _write_to_json(filename: Path, data: dict) -> None:
    """Write assignment results to a JSON file."""
    class NumpyEncoder(json.JSONEncoder):
        def default(self, obj):
            if isinstance(obj, np.integer):
                return int(obj)
            if isinstance(obj, np.floating):
                return float(obj)
            if isinstance(obj, np.bool_):
                return bool(obj)
            if isinstance(obj, np.ndarray):
                return obj.tolist()
            if isinstance(obj, (pd.Timestamp, datetime)):
                return obj.isoformat()
            return super().default(obj)

    def records(df: pd.DataFrame):
        return json.loads(df.to_json(orient='records', date_format='iso'))

    json_data = {
        'Solution Summary': dict(data['summary_metrics']),
        'Assignments': records(data['assignments']),
        'Candidates': records(data['candidates']),
        'Infeasible': records(data['infeasible']),
        'Rejected Orders': records(data['rejected_orders']),
        'Carrier Usage': records(data['carrier_usage']),
        'Execution Details': data['execution_details']
    }

    with open(filename, 'w') as f:
        json.dump(json_data, f, indent=2, cls=NumpyEncoder)
