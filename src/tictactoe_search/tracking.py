"""
Experiment tracking helpers (optional MLflow backend).

MLflow is imported only when tracking is requested, so it stays an optional
dependency (``pip install tictactoe-search[tracking]``).
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

_active = False


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[None]:
    global _active
    if not enabled:
        yield None
        return
    try:
        import mlflow  # type: ignore
    except ImportError:
        logging.warning("mlflow is not installed; continuing without tracking")
        yield None
        return

    if log_dir is not None:
        mlflow.set_tracking_uri((log_dir / "mlruns").as_uri())
    with mlflow.start_run(run_name=run_name):
        _active = True
        try:
            yield None
        finally:
            _active = False


def is_active() -> bool:
    return _active


def log_params(params: Dict[str, object]) -> None:
    if not _active:
        return
    import mlflow  # type: ignore

    mlflow.log_params(params)


def log_metrics(metrics: Dict[str, float]) -> None:
    if not _active:
        return
    import mlflow  # type: ignore

    mlflow.log_metrics(metrics)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    if not _active:
        return
    import mlflow  # type: ignore

    mlflow.log_artifact(str(path), artifact_path=artifact_path)
