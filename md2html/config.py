"""Tag configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .highlight import Highlighter, load_highlighter

TagPair = tuple[str, str]

MAX_HEADING_LEVEL = 6

PAIR_FIELDS = (
    "paragraph",
    "italic",
    "bold",
    "blockquote",
    "highlight",
    "strikethrough",
    "ordered_list",
    "ordered_list_item",
    "unordered_list",
    "unordered_list_item",
    "code",
    "code_block",
    "link_wrapper",
    "image_wrapper",
)


@dataclass(frozen=True)
class TagConfig:
    """Opening and closing strings emitted for each Markdown construct.

    Attributes:
        headings: Six tag pairs, one per heading level.
        paragraph: Wrapper for runs of plain text outside lists.
        italic: Pair used for ``*text*``.
        bold: Pair used for ``**text**``.
        blockquote: Pair emitted once per ``>`` nesting level.
        highlight: Pair used for ``==text==``.
        strikethrough: Pair used for ``~~text~~``.
        ordered_list: Pair wrapping an ordered list.
        ordered_list_item: Pair wrapping an ordered list item.
        unordered_list: Pair wrapping an unordered list.
        unordered_list_item: Pair wrapping an unordered list item.
        code: Pair wrapping inline code spans.
        code_block: Pair wrapping fenced code blocks.
        link_wrapper: Pair placed around generated anchors.
        image_wrapper: Pair placed around generated images.
        horizontal_rule: String emitted for ``---``.
        highlighter: Optional callable rendering fenced code block bodies.

    Examples:
        TagConfig(bold=("<b>", "</b>"), horizontal_rule="<hr/>")
    """

    headings: tuple[TagPair, ...] = (
        ("<h1>", "</h1>\n"),
        ("<h2>", "</h2>\n"),
        ("<h3>", "</h3>\n"),
        ("<h4>", "</h4>\n"),
        ("<h5>", "</h5>\n"),
        ("<h6>", "</h6>\n"),
    )

    # Inline
    paragraph: TagPair = ("<p>", "</p>")
    italic: TagPair = ("<em>", "</em>")
    bold: TagPair = ("<strong>", "</strong>")
    highlight: TagPair = ("<mark>", "</mark>")
    strikethrough: TagPair = ("<del>", "</del>")
    code: TagPair = ("<code>", "</code>")

    # Blocks
    blockquote: TagPair = ("<blockquote>\n", "</blockquote>\n")
    ordered_list: TagPair = ("<ol>", "</ol>")
    ordered_list_item: TagPair = ("<li>", "</li>")
    unordered_list: TagPair = ("<ul>", "</ul>")
    unordered_list_item: TagPair = ("<li>", "</li>")
    code_block: TagPair = ("<pre><code>", "</code></pre>")

    # Caller-defined containers
    link_wrapper: TagPair = ("", "")
    image_wrapper: TagPair = ("", "")

    horizontal_rule: str = "<hr>"
    highlighter: Highlighter | None = None

    def heading(self, level: int) -> TagPair:
        """Return the tag pair for a heading level.

        Levels above six are clamped to six on purpose: ``####### x`` renders
        as a sixth-level heading rather than plain text.
        """
        index = min(max(level, 1), MAX_HEADING_LEVEL) - 1
        return self.headings[index]


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`headings` must contain 6 tag pairs")
    """


def load_config(search_path: Path) -> TagConfig:
    """Load tag configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md2html]`` table from `pyproject.toml` and the ``[md2html]`` or
    ``[tool.md2html]`` table from `.md2html.toml` when present. Returns default
    values when no configuration is found. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        TagConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but is not a mapping, contains
            unsupported keys, or names a highlighter that cannot be imported.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "md2html")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".md2html.toml",
            table_paths=[("md2html",), ("tool", "md2html")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return TagConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> TagConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> TagConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return TagConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return TagConfig()

    settings = dict(raw_config)
    reference = settings.get("highlighter")
    if isinstance(reference, str):
        try:
            settings["highlighter"] = load_highlighter(reference)
        except ValueError as error:
            raise ConfigError(f"{config_file}: {error}") from error

    try:
        return TagConfig(**settings)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: TagConfig) -> TagConfig:
    """Convert list-valued tag tables (as produced by TOML) into tuples."""
    changes: dict[str, object] = {}

    if isinstance(config.headings, (list, tuple)):
        headings = tuple(
            tuple(pair) if isinstance(pair, list) else pair for pair in config.headings
        )
        if headings != config.headings:
            changes["headings"] = headings

    for name in PAIR_FIELDS:
        value = getattr(config, name)
        if isinstance(value, list):
            changes[name] = tuple(value)

    if not changes:
        return config
    return replace(config, **changes)


def validate_config(config: TagConfig) -> None:
    """Validate a `TagConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If a tag pair is not two strings, `headings` does not hold
            exactly six pairs, `horizontal_rule` is not a string, or the
            highlighter is not callable.

    Examples:
        validate_config(TagConfig(italic=("<i>", "</i>")))
    """
    config = normalize_config(config)

    if not isinstance(config.headings, tuple) or len(config.headings) != MAX_HEADING_LEVEL:
        raise ConfigError(f"`headings` must contain {MAX_HEADING_LEVEL} tag pairs")
    for level, pair in enumerate(config.headings, start=1):
        _ensure_pair(f"headings[{level}]", pair)

    for name in PAIR_FIELDS:
        _ensure_pair(name, getattr(config, name))

    if not isinstance(config.horizontal_rule, str):
        raise ConfigError("`horizontal_rule` must be a string")
    if config.highlighter is not None and not callable(config.highlighter):
        raise ConfigError("`highlighter` must be callable")


def apply_overrides(config: TagConfig, **overrides: object) -> TagConfig:
    """Apply override values to a `TagConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        TagConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `TagConfig`.

    Examples:
        updated = apply_overrides(config, horizontal_rule="<hr/>")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> TagConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        TagConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), horizontal_rule="<hr/>")
    """
    config = load_config(search_path)
    try:
        config = apply_overrides(config, **overrides)
    except TypeError as error:
        raise ConfigError(str(error)) from error
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_pair(name: str, value: object) -> None:
    if (
        not isinstance(value, tuple)
        or len(value) != 2
        or not all(isinstance(part, str) for part in value)
    ):
        raise ConfigError(f"`{name}` must be a pair of strings")
