import math
from datetime import datetime, date
from dataclasses import is_dataclass, asdict
from enum import Enum
from typing import Any
import numpy as np


def make_json_serializable(obj: Any):
    if isinstance(obj, dict):
        return {str(key): make_json_serializable(value) for key, value in obj.items()}
    elif isinstance(obj, (list, tuple, set)):
        return [make_json_serializable(item) for item in obj]
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, (float, np.floating)):
        value = float(obj)
        return value if math.isfinite(value) else None
    elif isinstance(obj, np.ndarray):
        return make_json_serializable(obj.tolist())
    elif isinstance(obj, (datetime, date)):
        return obj.isoformat()
    elif isinstance(obj, Enum):
        return obj.value
    elif is_dataclass(obj) and not isinstance(obj, type):
        return make_json_serializable(asdict(obj))
    elif hasattr(obj, 'model_dump'):
        return make_json_serializable(obj.model_dump(by_alias=True))
    return obj
