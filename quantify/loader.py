# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Load dimension, prefix and unit tables from YAML files into a registry.
"""

import os

import yaml

from quantify import config
from quantify import logging
from quantify.core import exceptions

DATA_DIRECTORY = os.path.join(os.path.dirname(__file__), "data")

TABLE_ORDER = ("dimensions", "prefixes", "units")


def read_table(path):
    """Read a list of records from a YAML file."""
    try:
        with open(path, encoding="utf-8") as fo:
            records = yaml.safe_load(fo)
    except FileNotFoundError:
        raise exceptions.ConfigNotFoundError("Table file not found: {}".format(path)) from None
    except yaml.YAMLError as err:
        raise exceptions.ConfigError("Could not read table {}: {}".format(path, err)) from err
    if records is None:
        return []
    if not isinstance(records, list):
        raise exceptions.ConfigError("Table {} must be a list of records".format(path))
    return records


def load_tables(registry, directory=None, tables=None):
    """Fill a registry from table files.

    Arguments:
        registry: the :class:`quantify.registry.Registry` to load into.
        directory: where the files are. Defaults to the configured
                   registry.data_directory, or the package data directory.
        tables: mapping of table kind ("dimensions", "prefixes", "units") to
                file name. Defaults to the configured registry.tables.

    Returns:
        The registry.
    """
    cf = config.get_config()
    if directory is None:
        directory = cf["registry.data_directory"] or DATA_DIRECTORY
    if tables is None:
        tables = cf["registry.tables"]
    loaders = {
        "dimensions": registry.load_dimension,
        "prefixes": registry.load_prefix,
        "units": registry.load_unit,
    }
    for kind in TABLE_ORDER:
        filename = tables.get(kind)
        if not filename:
            continue
        path = os.path.join(os.path.expanduser(directory), filename)
        records = read_table(path)
        for record in records:
            try:
                loaders[kind](record)
            except exceptions.QuantifyError as err:
                logging.exception_error("bad record in {}".format(path), err)
                raise
        logging.info("loaded {} {} from {}".format(len(records), kind, path))
    return registry

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
