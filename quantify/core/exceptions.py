# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""All common exceptions."""


class QuantifyError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgumentError(QuantifyError, ValueError):
    """A definition, option or operand was not acceptable."""


class InvalidDimensionError(InvalidArgumentError):
    """Unknown base quantity or physical quantity reference."""


class DuplicateUnitIdentityError(InvalidArgumentError):
    """A unit with the same label is already loaded."""


class UnitNotFoundError(QuantifyError, LookupError):
    """No unit could be resolved from the given token."""


# Prefix combination errors
class PrefixError(QuantifyError):
    pass


class PrefixConflictError(PrefixError):
    """The unit already carries a prefix of the same class."""


class PrefixClassMismatchError(PrefixError):
    """Prefix and unit belong to different unit systems."""


class IncompatibleUnitsError(QuantifyError, TypeError):
    """Units do not represent the same physical quantity."""


# Text input errors
class ParseError(QuantifyError, ValueError):
    pass


class MalformedUnitExpressionError(ParseError):
    """A unit string could not be split into numerator and denominator."""


class QuantityParseError(ParseError):
    """A string could not be parsed into a value and a unit."""


# Configuration errors
class ConfigError(QuantifyError):
    """Raised when some configuration is not usable."""


class ConfigNotFoundError(ConfigError):
    """Raised when a configuration table or file is missing."""

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
