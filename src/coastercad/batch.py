"""Sequential generation of many coasters into a directory."""

from __future__ import annotations

import copy
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from coastercad.designer import CoasterDesigner
from coastercad.geometry_checks import ValidationResult
from coastercad.io.stl import DEFAULT_NAME
from coastercad.settings import AdvancedSettings, CoasterSpec, TextElement
from coastercad.templates import CoasterTemplate

logger = logging.getLogger(__name__)

_Job = Tuple[CoasterSpec, Optional[AdvancedSettings]]


@dataclass
class BatchConfig:
    """Where and how a batch is written.

    ``file_name_pattern`` is a :meth:`str.format` pattern with the fields
    ``index`` (1-based) and ``shape`` (lower-case shape name).
    ``progress_callback`` receives an integer percentage after each item.
    """

    output_directory: str = "."
    file_name_pattern: str = "coaster_{index:03d}.stl"
    binary: bool = True
    model_name: str = DEFAULT_NAME
    include_statistics: bool = False
    stop_on_error: bool = False
    progress_callback: Optional[Callable[[int], None]] = None


@dataclass
class BatchItemResult:
    index: int
    file_name: str = ""
    success: bool = False
    error: Optional[str] = None
    validation: Optional[ValidationResult] = None


@dataclass
class BatchResult:
    total_count: int = 0
    success_count: int = 0
    failed_count: int = 0
    items: List[BatchItemResult] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def all_succeeded(self) -> bool:
        return self.failed_count == 0


class BatchProcessor:
    """Generate items one after another, each with its own designer."""

    def generate_batch(self, specs: Sequence[CoasterSpec], config: BatchConfig) -> BatchResult:
        return self._run([(s, None) for s in specs], config)

    def generate_set(self, spec: CoasterSpec, count: int, config: BatchConfig) -> BatchResult:
        return self._run([(spec.copy(), None) for _ in range(count)], config)

    def generate_from_templates(self, templates: Sequence[CoasterTemplate],
                                config: BatchConfig) -> BatchResult:
        return self._run([(t.settings.copy(), t.advanced) for t in templates], config)

    def generate_personalized(self, spec: CoasterSpec, texts: Sequence[str],
                              config: BatchConfig,
                              advanced: Optional[AdvancedSettings] = None,
                              text_template: Optional[TextElement] = None) -> BatchResult:
        """One coaster per entry of ``texts``, each carrying that line of text."""

        base_text = text_template or TextElement()
        jobs: List[_Job] = []
        for text in texts:
            adv = copy.deepcopy(advanced) if advanced is not None else AdvancedSettings()
            element = copy.deepcopy(base_text)
            element.text = text
            adv.text_elements.append(element)
            jobs.append((spec.copy(), adv))
        return self._run(jobs, config)

    def _run(self, jobs: List[_Job], config: BatchConfig) -> BatchResult:
        result = BatchResult(total_count=len(jobs))
        started = time.perf_counter()

        out_dir = Path(config.output_directory)
        out_dir.mkdir(parents=True, exist_ok=True)

        for i, (spec, advanced) in enumerate(jobs):
            item = BatchItemResult(index=i)
            try:
                item.file_name = config.file_name_pattern.format(
                    index=i + 1, shape=spec.shape.name.lower())
                designer = CoasterDesigner(spec, copy.deepcopy(advanced) if advanced else None)
                validation = designer.generate_and_export(
                    out_dir / item.file_name, binary=config.binary, name=config.model_name,
                    include_statistics=config.include_statistics)
                item.validation = validation
                item.success = validation.is_valid
                if validation.is_valid:
                    result.success_count += 1
                else:
                    result.failed_count += 1
                    item.error = "; ".join(validation.errors)
            except Exception as exc:
                logger.error("Batch item %d failed: %s", i + 1, exc)
                item.success = False
                item.error = str(exc)
                result.failed_count += 1
                if config.stop_on_error:
                    result.items.append(item)
                    break

            result.items.append(item)
            if config.progress_callback is not None:
                config.progress_callback((i + 1) * 100 // len(jobs))

        result.elapsed_seconds = time.perf_counter() - started
        logger.info("Batch finished: %d ok, %d failed in %.2fs",
                    result.success_count, result.failed_count, result.elapsed_seconds)
        return result


__all__ = ['BatchConfig', 'BatchItemResult', 'BatchResult', 'BatchProcessor']
