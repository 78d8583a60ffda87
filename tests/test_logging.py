# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Unit tests for quantify.logging module.
"""

import syslog

import pytest

from quantify import logging
from quantify.core import exceptions
from quantify.registry import Registry


@pytest.fixture
def sent(monkeypatch):
    """Capture syslog calls, with DEBUG priority enabled."""
    messages = []
    monkeypatch.setattr(syslog, "syslog", lambda priority, text: messages.append((priority, text)))
    before = logging.get_priority()
    logging.set_priority("debug")
    yield messages
    logging.set_priority(before)


def test_encode_tags_message():
    assert logging._encode("loaded %s units", (3,)) == "\ufeffquantify: loaded 3 units"


def test_encode_bad_format():
    msg = logging._encode("value %d", ("x",))
    assert "had format TypeError" in msg


def test_encode_without_args_keeps_percent():
    assert logging._encode("loaded unit %", ()) == "\ufeffquantify: loaded unit %"


def test_format_exception():
    text = logging._format_exception(exceptions.UnitNotFoundError("Unknown unit: 'zz'"))
    assert text.startswith("quantify.core.exceptions.UnitNotFoundError")
    assert "zz" in text


def test_priority_names():
    before = logging.get_priority()
    try:
        logging.set_priority("info")
        assert logging.get_priority() == syslog.LOG_INFO
        logging.set_priority(syslog.LOG_ERR)
        assert logging.get_priority() == syslog.LOG_ERR
        with pytest.raises(ValueError):
            logging.set_priority("chatty")
    finally:
        logging.set_priority(before)


class TestSend:

    def test_levels(self, sent):
        logging.debug("loaded prefix %s", "kilo")
        logging.error("broken")
        assert sent[0][0] & 0x07 == syslog.LOG_DEBUG
        assert sent[0][1] == "\ufeffquantify: loaded prefix kilo"
        assert sent[1][0] & 0x07 == syslog.LOG_ERR

    def test_filtered_by_priority(self, sent):
        logging.set_priority("error")
        logging.debug("hidden")
        logging.info("hidden")
        logging.error("shown")
        assert [text for _, text in sent] == ["\ufeffquantify: shown"]

    def test_exception_error(self, sent):
        logging.exception_error("bad record in %s", exceptions.InvalidArgumentError("no label"),
                                "units.yaml")
        priority, text = sent[0]
        assert priority & 0x07 == syslog.LOG_ERR
        assert text.startswith("\ufeffquantify: bad record in units.yaml: ")
        assert text.endswith("InvalidArgumentError: no label")

    def test_stderr(self, sent, monkeypatch, capsys):
        monkeypatch.setattr(logging, "USESTDERR", True)
        logging.info("to both")
        assert capsys.readouterr().err == "quantify: to both\n"
        assert len(sent) == 1

    def test_registry_loading_logged(self, sent):
        registry = Registry()
        registry.load_dimension({"physical_quantity": "length", "length": 1})
        assert sent[-1][1] == "\ufeffquantify: loaded dimension length"

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
