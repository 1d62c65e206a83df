"""Load run results written by a test harness."""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import TypeAdapter, ValidationError

from chat_report.models.result import RunResult

log = logging.getLogger(__name__)

_RUNS = TypeAdapter(list[RunResult])


async def load_results(path: Path) -> Sequence[RunResult]:
    """Load run results from a YAML or JSON file.

    The file may hold a single run or a list of runs.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty, unparsable or fails validation

    """
    if not path.is_file():
        raise FileNotFoundError(f"Results file not found: {path}")

    content = await asyncio.to_thread(path.read_text, encoding="utf-8")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty results file: {path}")

    if isinstance(data, dict):
        data = [data]

    try:
        runs = _RUNS.validate_python(data)
    except ValidationError as e:
        raise ValueError(f"Invalid results schema in {path}: {e}") from e

    log.debug("Loaded %d run(s) from %s", len(runs), path)
    return runs
