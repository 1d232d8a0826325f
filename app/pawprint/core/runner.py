"""Configuration file runner.

Reads configuration files in the order given, parses each line, expands
glob patterns and hands every resolved path to the dispatcher. Lines are
processed strictly in order, so exclusions protect only the clean
operations of the lines that follow them.
"""

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pawprint.core.dispatcher import Dispatcher
from pawprint.filesystem.exclusions import ExclusionRegistry
from pawprint.filesystem.expander import expand_glob
from pawprint.filesystem.handlers import Handlers
from pawprint.models.result import ActionResult
from pawprint.models.run import RunConfig
from pawprint.rules.attributes import Flag
from pawprint.rules.parser import Rule, parse_rules

logger = logging.getLogger(__name__)

CONFIG_SUFFIX = ".conf"


@dataclass(slots=True)
class RunReport:
    """Aggregated outcome of a run.

    Attributes:
        results: Handler results in execution order.
        rules: Number of rules applied (after boot and prefix filtering).
        paths: Number of resolved paths dispatched.
        unreadable: Configuration files that could not be read.
    """

    results: list[ActionResult] = field(default_factory=list)
    rules: int = 0
    paths: int = 0
    unreadable: list[str] = field(default_factory=list)

    @property
    def failures(self) -> list[ActionResult]:
        """Results of handlers that failed."""
        return [r for r in self.results if r.failed]

    @property
    def success(self) -> bool:
        """Whether every handler succeeded."""
        return not self.failures


def collect_config_files(path: Path) -> list[Path]:
    """Resolve a configuration path into the files it stands for.

    A directory contributes its ``*.conf`` files in name order; any other
    path stands for itself.
    """
    if path.is_dir():
        return sorted(p for p in path.iterdir() if p.suffix == CONFIG_SUFFIX and p.is_file())
    return [path]


class Runner:
    """Applies configuration files against the filesystem.

    Attributes:
        _config: Execution modes for this run.
        _dispatcher: Dispatcher bound to the run's handler set.
    """

    def __init__(
        self,
        config: RunConfig,
        *,
        exclusions: ExclusionRegistry | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._config = config
        handlers = Handlers(config, exclusions, clock=clock or time.time)
        self._dispatcher = Dispatcher(handlers)

    @property
    def exclusions(self) -> ExclusionRegistry:
        """Exclusion registry accumulated during the run."""
        return self._dispatcher.handlers.exclusions

    def run(self, paths: Iterable[Path]) -> RunReport:
        """Apply every configuration file reachable from paths, in order."""
        report = RunReport()
        for path in paths:
            for config_file in collect_config_files(path):
                self.apply_file(config_file, report)
        return report

    def apply_file(self, path: Path, report: RunReport | None = None) -> RunReport:
        """Apply one configuration file.

        An unreadable file is logged and recorded in the report.
        """
        report = report if report is not None else RunReport()
        try:
            with open(path, encoding="utf-8", errors="surrogateescape") as f:
                self.apply_lines(f, str(path), report)
        except OSError as e:
            logger.warning("Cannot open configuration file %s: %s", path, e)
            report.unreadable.append(str(path))
        return report

    def apply_lines(
        self,
        lines: Iterable[str],
        source: str = "<input>",
        report: RunReport | None = None,
    ) -> RunReport:
        """Parse and apply configuration lines in order."""
        report = report if report is not None else RunReport()
        for rule in parse_rules(lines, self._config, source):
            if not self._selected(rule):
                logger.debug("%s: %s is outside the selected prefixes", rule.location, rule.path)
                continue
            report.rules += 1
            for path in self._resolve(rule):
                report.paths += 1
                report.results.extend(self._dispatcher.dispatch(path, rule.record))
        return report

    def _selected(self, rule: Rule) -> bool:
        if Flag.EXCLUDE in rule.record.flags:
            return True
        return self._config.selects(rule.path)

    @staticmethod
    def _resolve(rule: Rule) -> list[str]:
        if rule.needs_glob:
            return expand_glob(rule.path)
        return [rule.path]
