"""Include/exclude rule evaluation - pure predicates, no I/O."""

from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True)
class FilterConfig:
    """
    Include/exclude rules for outline entries and files.

    An empty include list matches everything on that axis; an empty exclude
    list excludes nothing.
    """

    included_tags: tuple[str, ...] = ()
    excluded_tags: tuple[str, ...] = ()
    included_keywords: tuple[str, ...] = ()
    excluded_keywords: tuple[str, ...] = ()
    included_properties: tuple[tuple[str, str], ...] = ()
    excluded_properties: tuple[tuple[str, str], ...] = ()
    included_files: tuple[str, ...] = ()
    excluded_files: tuple[str, ...] = ()
    use_tag_inheritance: bool = True


def _property_matches(pairs, properties: dict[str, str]) -> bool:
    # Keys are case-insensitive, values must match exactly.
    by_key = {k.upper(): v for k, v in properties.items()}
    return any(by_key.get(key.upper()) == value for key, value in pairs)


def admit(
    tags,
    keyword: str | None,
    properties: dict[str, str],
    config: FilterConfig,
) -> bool:
    """
    Decide whether an entry passes every configured rule.

    Each dimension is checked independently and all must pass.
    """
    tags = set(tags)
    if config.included_tags and not tags.intersection(config.included_tags):
        return False
    if config.excluded_tags and tags.intersection(config.excluded_tags):
        return False
    if config.included_keywords and keyword not in config.included_keywords:
        return False
    if config.excluded_keywords and keyword in config.excluded_keywords:
        return False
    if config.excluded_properties and _property_matches(config.excluded_properties, properties):
        return False
    if config.included_properties and not _property_matches(config.included_properties, properties):
        return False
    return True


def admit_file(path: str, config: FilterConfig) -> bool:
    """File-level rules, compared by base name only."""
    name = PurePath(path).name
    if config.included_files and name not in config.included_files:
        return False
    if config.excluded_files and name in config.excluded_files:
        return False
    return True
