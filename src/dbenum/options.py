from dataclasses import dataclass

from libb import ConfigOptions

__all__ = [
    'EnumOptions',
    'DEFAULT_OPTIONS',
]


@dataclass
class EnumOptions(ConfigOptions):
    """Options

    - integer_casts: cast names that store the enum index instead of its value
      (default: ('int', 'integer'))
    - resolve_imports: allow type identifiers given as dotted import paths
      (default: True). When False only registered names and classes resolve.
    """
    integer_casts: tuple[str, ...] = ('int', 'integer')
    resolve_imports: bool = True

    def __post_init__(self):
        if isinstance(self.integer_casts, str):
            raise ValueError('integer_casts must be a sequence of cast names, not a string')
        casts = tuple(self.integer_casts or ())
        if not casts:
            raise ValueError('integer_casts must name at least one cast')
        if not all(isinstance(cast, str) and cast.strip() for cast in casts):
            raise ValueError(f'integer_casts must contain non-empty strings: {casts!r}')
        self.integer_casts = tuple(cast.strip().lower() for cast in casts)
        self.resolve_imports = bool(self.resolve_imports)


DEFAULT_OPTIONS = EnumOptions()
