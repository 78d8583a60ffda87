# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
r"""Configuration object and factory function.

Based on the confuse YAML configuration module.

Config files are merged together from various sources. The default values are
embedded here in the file config_default.yaml. User's may override, or set
additional values, by placing a "config.yaml" file in the user configuration directory.

The user configuration directory would be:

Linux:
    `~/.config/quantify/`

MacOS:
    `~/.config/quantify/`
    or
    `~/Library/Application Support/quantify/`

Windows:
    `~\\AppData\\Roaming\\quantify\\`

The `format` section holds the presentation toggles used when unit symbols,
labels and names are derived. The `quantity` section holds arithmetic
behavior, and the `registry` section names the table files loaded into the
default unit registry.
"""

from collections import ChainMap
from collections.abc import Mapping

import confuse

_CONFIG = None  # singleton instance.


class Config(ChainMap):
    """Top-level configuration object.

    A Singleton configuration object.
    A subclass of :py:class:`collections.ChainMap`, it allows chaining other configurations later.
    """

    def __init__(self, *maps):
        self.__dict__["maps"] = list(maps) or [{}]

    def __getattr__(self, name):
        try:
            return self.__getitem__(name)
        except KeyError:
            raise AttributeError("Config: No attribute or key {!r}".format(name)) from None

    def __setattr__(self, name, val):
        self.__setitem__(name, val)

    def __delattr__(self, name):
        self.__delitem__(name)

    # Behaves like defaultdict, returning empty ConfigDict by default.
    def __missing__(self, key):
        value = ConfigDict()
        self.__setitem__(key, value)
        return value


class ConfigDict(dict):
    """Configuration Dictionary.

    Provides both attribute style and normal mapping style syntax to access
    mapping values.

    Also features "reaching into" sub-containers using a dot-delimited syntax
    for the key:

        >>> cf = config.get_config()
        >>> print(cf.format.superscript_characters)
        True
        >>> cf["format.symbol_denominator_delimiter"]
        '/'
    """

    def __init__(self, *args, **kwargs):
        self.__dict__["_depth"] = kwargs.pop("_depth", 0)
        dict.__init__(self, *args, **kwargs)

    def __repr__(self):
        return "{}({})".format(self.__class__.__name__, dict.__repr__(self))

    def __setitem__(self, name, value):
        d, name = self._get_subtree(name)
        return dict.__setitem__(d, name, value)

    def __getitem__(self, name):
        d, name = self._get_subtree(name)
        return dict.__getitem__(d, name)

    def __delitem__(self, name):
        d, name = self._get_subtree(name)
        return dict.__delitem__(d, name)

    def _get_subtree(self, name):
        d = self
        depth = self.__dict__["_depth"]
        parts = name.split(".")
        for part in parts[:-1]:
            depth += 1
            d = d.setdefault(part, self.__class__(_depth=depth))
        return d, parts[-1]

    __setattr__ = __setitem__
    __delattr__ = __delitem__

    def __getattr__(self, name):
        try:
            return self.__getitem__(name)
        except KeyError:
            raise AttributeError("ConfigDict: No attribute or key {!r}".format(name)) from None

    def copy(self):
        """Deep copy of the nested ConfigDict tree."""
        return to_config_dict(self, self._depth)

    __copy__ = copy


def to_config_dict(mapping, _depth=0):
    """Convert a nested mapping, as produced by confuse, into ConfigDict objects.
    """
    cd = ConfigDict(_depth=_depth)
    for key, value in mapping.items():
        if isinstance(value, Mapping):
            value = to_config_dict(value, _depth + 1)
        elif isinstance(value, list):
            value = list(value)
        dict.__setitem__(cd, key, value)
    return cd


def get_config(initdict=None, _filename=None, **kwargs):
    """Get primary configuration.

    Returns a Configuration instance containing configuration parameters. An
    extra dictionary may be merged in with the 'initdict' parameter.  And
    finally, extra options may also be added with keyword parameters.

    There is only one Config object in the program, and this will return it. This is the primary
    interface to obtain it.

    Returns:
        A :class:`Config` instance.
    """
    global _CONFIG
    if _CONFIG is None:
        cf = confuse.Configuration("quantify", "quantify.config")
        if _filename:
            cf.set_file(_filename)
        if isinstance(initdict, dict):
            cf.add(initdict)
        cf.add(kwargs)
        _CONFIG = Config(to_config_dict(cf.flatten()))
    return _CONFIG

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
