from dataclasses import dataclass


@dataclass(frozen=True)
class CompilerOptions:
  """Grammar and built-in policies fixed at compiler construction

  pow_from_right: `a^b^c` parses as `a^(b^c)` instead of `(a^b)^c`.
  natural_log: `log` is the natural logarithm instead of base 10.
  """
  pow_from_right: bool = False
  natural_log: bool = False


DEFAULT_OPTIONS = CompilerOptions()
