# Copyright (C) 1998-2018 by the Free Software Foundation, Inc.
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License
# as published by the Free Software Foundation; either version 2
# of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301,
# USA.

"""Contains all the common functionality for the bounce scanning API.

The engines form a static, ordered table.  A message is offered to each
engine in bn_cfg.BOUNCE_PIPELINE order; the first whose header signature
matches and which returns a result wins.  If no engine does, the message is
not a recognized bounce, which is not an error.
"""

from collections import namedtuple

from Bouncer import bn_cfg
from Bouncer import Errors
from Bouncer import Message
from Bouncer import Utils
from Bouncer.Bouncers import RFC3464
from Bouncer.Bouncers import V5sendmail
from Bouncer.Logging.Syslog import syslog

COMMASPACE = ', '

Engine = namedtuple('Engine', 'name description signature scan')


def _engine(module):
    return Engine(module.AGENT, module.DESCRIPTION, module.SIGNATURE,
                  module.scan)


# Every engine there is, in default order.
ENGINES = [
    _engine(RFC3464),
    _engine(V5sendmail),
    ]

_BY_NAME = dict((engine.name, engine) for engine in ENGINES)



def get_pipeline(names=None):
    """Return the engines named in names, default bn_cfg.BOUNCE_PIPELINE."""
    if names is None:
        names = bn_cfg.BOUNCE_PIPELINE
    pipeline = []
    for name in names:
        try:
            pipeline.append(_BY_NAME[name])
        except KeyError:
            raise Errors.UnknownEngineError(name)
    return pipeline


def matches(engine, mhead):
    return Utils.match_headers(engine.signature, mhead)


def select(mhead, pipeline=None):
    """Return the first engine whose signature matches mhead, or None."""
    if pipeline is None:
        pipeline = get_pipeline()
    for engine in pipeline:
        if matches(engine, mhead):
            return engine
    return None


def scan(mhead, mbody, pipeline=None):
    """Return (engine, records, rfc822 headers) or None.

    An engine whose signature matches but which finds nothing does not end
    the search; the next engine in the pipeline gets its turn.
    """
    if pipeline is None:
        pipeline = get_pipeline()
    for engine in pipeline:
        if not matches(engine, mhead):
            continue
        result = engine.scan(mhead, mbody)
        if result is not None:
            records, rfc822 = result
            return engine, records, rfc822
    return None


def ScanMessage(msg, pipeline=None):
    mhead = Message.headers_of(msg)
    result = scan(mhead, Message.body_of(msg), pipeline)
    msgid = mhead.get('message-id') or 'n/a'
    if result is None:
        syslog('bounce', 'Not a recognized bounce: %s', msgid)
        return None
    engine, records, rfc822 = result
    syslog('bounce', '%s found %s in %s', engine.name,
           COMMASPACE.join(record.recipient for record in records), msgid)
    return result
