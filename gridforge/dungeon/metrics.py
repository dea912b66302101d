from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'attempts': 0,
        'forced_attempts': 0,
        'grids': 0,
        'rooms': 0,
        'rooms_off_point': 0,
        'connections': 0,
        'extra_paths': 0,
        'tiles_floor': 0,
        'tiles_corridor': 0,
        'tiles_wall': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
