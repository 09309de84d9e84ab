"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (STYLECOMPLETE__SECTION__KEY)
3. Repo YAML (.stylecomplete/config.yaml)
4. Global YAML (~/.config/stylecomplete/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    STYLECOMPLETE__<SECTION>__<KEY>=<VALUE>

Examples:
    STYLECOMPLETE__LOGGING__LEVEL=DEBUG
    STYLECOMPLETE__COMPLETION__LOOKBACK_LINES=20
    STYLECOMPLETE__COMPLETION__NESTING=depth_one
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
NestingMode = Literal["innermost", "depth_one"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        STYLECOMPLETE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every registry update.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class FilesConfig(BaseModel):
    """Which style files feed the symbol registries.

    Patterns are globs relative to the workspace root. ``**/`` matches any
    depth (including none) and ``{a,b}`` alternatives are expanded.
    """

    class_patterns: list[str] = Field(
        default_factory=lambda: ["**/*.css"],
        description="Files scanned for CSS class names.",
    )
    mixin_patterns: list[str] = Field(
        default_factory=lambda: ["**/*.{css,pcss,postcss}"],
        description="Files scanned for PostCSS @define-mixin definitions.",
    )
    exclude_dirs: list[str] = Field(
        default_factory=list,
        description="Extra directory names to skip, on top of node_modules, dist, etc.",
    )


class CompletionConfig(BaseModel):
    """Context detection settings.

    Env vars:
        STYLECOMPLETE__COMPLETION__LOOKBACK_LINES: Lines scanned for an enclosing call
        STYLECOMPLETE__COMPLETION__REQUIRE_QUOTE: Require an open quote at the cursor
        STYLECOMPLETE__COMPLETION__NESTING: innermost | depth_one
    """

    attribute_names: list[str] = Field(
        default_factory=lambda: ["className", "class", "classList"],
        description="Attributes whose quoted value gets class name completion.",
    )
    function_names: list[str] = Field(
        default_factory=lambda: ["cn", "cx", "clsx", "classNames"],
        description="Calls whose quoted arguments get class name completion.",
    )
    lookback_lines: int = Field(
        default=10,
        description="Lines examined (cursor line included) when looking for the enclosing call. "
        "TRADEOFF: Higher values find calls opened further up at a small CPU cost per keystroke.",
    )
    require_quote: bool = Field(
        default=True,
        description="Only complete inside an open single or double quote.",
    )
    nesting: NestingMode = Field(
        default="innermost",
        description="innermost: the innermost enclosing named call decides. "
        "depth_one: only a single unresolved call may decide.",
    )
    mixin_at_rules: list[str] = Field(
        default_factory=lambda: ["mixin"],
        description="At-rules (without '@') followed by a mixin name in stylesheets.",
    )

    @field_validator("lookback_lines")
    @classmethod
    def validate_lookback_lines(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"lookback_lines must be >= 1, got {v}")
        return v


class WatcherConfig(BaseModel):
    """File watcher configuration.

    Env vars:
        STYLECOMPLETE__WATCHER__DEBOUNCE_SEC: Quiet window before a batch is flushed
        STYLECOMPLETE__WATCHER__MAX_DEBOUNCE_WAIT_SEC: Upper bound on batching delay
    """

    debounce_sec: float = Field(
        default=0.5,
        description="Sliding debounce window. Lower values refresh faster during rapid saves.",
    )
    max_debounce_wait_sec: float = Field(
        default=2.0,
        description="Maximum wait before a batch is flushed during continuous changes.",
    )


class StyleCompleteConfig(BaseModel):
    """Root configuration for stylecomplete.

    All settings can be configured via:
    1. Environment variables: STYLECOMPLETE__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    files: FilesConfig = Field(default_factory=FilesConfig)
    completion: CompletionConfig = Field(default_factory=CompletionConfig)
    watcher: WatcherConfig = Field(default_factory=WatcherConfig)
