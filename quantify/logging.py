# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Syslog messages from table loading and the unit registry.

Every message is tagged "quantify:" and sent to the USER facility (or the
configured one) without calling openlog, so the host program's syslog
identity is left alone.

Configurable with the following environment variables:

QUANTIFY_LOG_FACILITY
    Sets the syslog facility to use, default USER.

QUANTIFY_LOG_PRIORITY
    Most verbose priority sent, default NOTICE. Registry loading logs at
    DEBUG and INFO, so set this to see it.

QUANTIFY_LOG_STDERR
    Set to also write messages to stderr.
"""

import os
import sys
import syslog
import traceback

FACILITY: str = os.environ.get("QUANTIFY_LOG_FACILITY", "USER").upper()
PRIORITY: str = os.environ.get("QUANTIFY_LOG_PRIORITY", "NOTICE").upper()
USESTDERR: bool = bool(os.environ.get("QUANTIFY_LOG_STDERR"))

TAG = "quantify"

PRIORITIES = {
    "DEBUG": syslog.LOG_DEBUG,
    "INFO": syslog.LOG_INFO,
    "NOTICE": syslog.LOG_NOTICE,
    "WARNING": syslog.LOG_WARNING,
    "WARN": syslog.LOG_WARNING,
    "ERR": syslog.LOG_ERR,
    "ERROR": syslog.LOG_ERR,
}

_priority = PRIORITIES.get(PRIORITY, syslog.LOG_NOTICE)


def set_priority(level):
    """Set the most verbose priority sent.

  Args:
      level: a priority name such as "info", or a syslog.LOG_* level.
  """
    global _priority
    if isinstance(level, str):
        try:
            level = PRIORITIES[level.upper()]
        except KeyError:
            raise ValueError("Unknown log priority: {!r}".format(level)) from None
    _priority = level


def get_priority():
    return _priority


def _facility():
    return getattr(syslog, "LOG_" + FACILITY, syslog.LOG_USER)


def _send(level, msg, args):
    if level > _priority:
        return
    text = _encode(msg, args)
    syslog.syslog(_facility() | level, text)
    if USESTDERR:
        print(text[1:], file=sys.stderr)


def debug(msg, *args):
    """Send a log message at DEBUG priority."""
    _send(syslog.LOG_DEBUG, msg, args)


def info(msg, *args):
    """Send a log message at INFO priority."""
    _send(syslog.LOG_INFO, msg, args)


def error(msg, *args):
    """Send a log message at ERROR priority."""
    _send(syslog.LOG_ERR, msg, args)


def exception_error(prefix, ex, *args):
    """Log a compact exception at ERROR priority."""
    error("{}: {}".format(_format(prefix, args), _format_exception(ex)))


def _format(o, args):
    msg = str(o)
    if args:
        try:
            msg = msg % args
        except TypeError:
            msg = msg + " had format TypeError: " + str(args)
    return msg.replace("\r\n", " ")


def _encode(o, args):
    # UTF8 BOM per RFC-5424.
    return "\ufeff{}: {}".format(TAG, _format(o, args))


def _format_exception(ex):
    return " | ".join([line.strip() for line in traceback.format_exception_only(type(ex), ex)])

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab
