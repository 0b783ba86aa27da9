"""Pipeline orchestration for Deslopify.

Responsibilities:
- Build every stage once and run the active ones in fixed order.
- Hold code regions out of the whole stage chain when configured.
- Trim the result and summarize the run in a `NormalizationReport`.

Key types:
- `Deslopifier`: orchestration facade and extension point for custom rules.
"""

from __future__ import annotations

from collections.abc import Callable

from ..config import STAGE_ORDER, DeslopifyConfig
from ..models.datatypes import NormalizationReport, ProtectedRegion
from ..stages import (
    AbbreviationStage,
    CharacterStage,
    DateTimeStage,
    EmojiStage,
    LayoutStage,
    PhrasePosition,
    PhraseStage,
    PunctuationStage,
    TextStage,
)
from ..telemetry.logger import RunLogger
from ..text.protection import RegionProtector
from ..text.rules import PatternLike, ReplacementLike
from .telemetry import PipelineTelemetryMixin


class Deslopifier(PipelineTelemetryMixin):
    """Coordinate all normalization stages for repeated runs.

    Stages are created once; `configure` replaces their options while keeping
    every rule added through the extension helpers.
    """

    def __init__(
        self,
        config: DeslopifyConfig | None = None,
        run_logger: RunLogger | None = None,
        stage_progress_callback: Callable[[str, int, int], None] | None = None,
    ) -> None:
        """Initialize stages, configuration, and optional runtime hooks."""

        self._run_logger = run_logger
        self._stage_progress_callback = stage_progress_callback
        self._protector = RegionProtector()
        self._characters = CharacterStage()
        self._phrases = PhraseStage()
        self._datetime = DateTimeStage()
        self._abbreviations = AbbreviationStage()
        self._punctuation = PunctuationStage()
        self._layout = LayoutStage()
        self._emoji = EmojiStage()
        self._stages: dict[str, TextStage] = {
            stage.name: stage
            for stage in (
                self._characters,
                self._phrases,
                self._datetime,
                self._abbreviations,
                self._punctuation,
                self._layout,
                self._emoji,
            )
        }
        self._config = DeslopifyConfig()
        self.configure(config or DeslopifyConfig())

    @property
    def config(self) -> DeslopifyConfig:
        """Return the configuration applied by the next `process` call."""

        return self._config

    def configure(self, config: DeslopifyConfig) -> None:
        """Apply skip flags and stage options; rules already added are retained."""

        self._config = config
        self._punctuation.set_options(config.fix_unbalanced_delimiters)
        self._layout.set_options(config.layout)
        self._emoji.set_options(config.emoji)

    def stage(self, name: str) -> TextStage:
        """Return the live stage instance registered under `name`."""

        try:
            return self._stages[name]
        except KeyError:
            known = ", ".join(STAGE_ORDER)
            raise ValueError(f"Unknown stage `{name}`; expected one of: {known}.") from None

    def add_character_rule(
        self, pattern: PatternLike, replacement: ReplacementLike = "", count: int = 0
    ) -> None:
        """Append a rule to the character stage."""

        self._characters.add_rule(pattern, replacement, count)

    def add_phrase_pattern(
        self, pattern: PatternLike, position: PhrasePosition = "anywhere", count: int = 0
    ) -> None:
        """Append a phrase for the phrase stage to remove."""

        self._phrases.add_pattern(pattern, position, count)

    def add_punctuation_rule(
        self, pattern: PatternLike, replacement: ReplacementLike = "", count: int = 0
    ) -> None:
        """Append a rule to the punctuation stage; balancing still runs last."""

        self._punctuation.add_rule(pattern, replacement, count)

    def add_overused_emoji(self, pattern: PatternLike) -> None:
        """Append an overused-emoji pattern to the emoji stage."""

        self._emoji.add_overused_pattern(pattern)

    def process(self, text: str, config: DeslopifyConfig | None = None) -> str:
        """Normalize `text` and return the trimmed result."""

        return self.process_with_report(text, config).text

    def process_with_report(
        self, text: str, config: DeslopifyConfig | None = None
    ) -> NormalizationReport:
        """Normalize `text` and return the result with run counters.

        Raises:
            PipelineStageError: If a stage raised; the original error is chained.
            ProtectedRegionError: If a rule altered a code-region placeholder.
        """

        if config is not None:
            self.configure(config)

        active = self._config.active_stages()
        regions: list[ProtectedRegion] = []
        current = text
        protect = self._config.layout.preserve_code_blocks
        if protect:
            current, regions = self._protector.extract(current)

        stages_run: list[str] = []
        for name in STAGE_ORDER:
            if name not in active:
                self._on_stage_skipped(name)
                continue
            stage = self._stages[name]
            current = self._run_stage(name, lambda: stage.process(current))
            stages_run.append(name)

        if protect:
            current = self._protector.restore(current, regions)
        result = current.strip()

        report = NormalizationReport(
            text=result,
            stages_run=tuple(stages_run),
            protected_region_count=len(regions)
            + (self._layout.last_protected_count if "layout" in active else 0),
            delimiters_inserted=(
                self._punctuation.last_inserted_count if "punctuation" in active else 0
            ),
        )
        if self._run_logger is not None:
            self._run_logger.log_run_summary(
                stages_run=len(report.stages_run),
                protected_regions=report.protected_region_count,
                delimiters_inserted=report.delimiters_inserted,
            )
        return report


def deslopify(text: str, config: DeslopifyConfig | None = None) -> str:
    """Normalize `text` with a freshly built pipeline and default rules."""

    return Deslopifier(config).process(text)
