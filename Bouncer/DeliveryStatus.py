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

"""Delivery status records produced by the bounce engines.

An engine builds mutable Draft objects while it walks the body of a bounce,
then hands each of them to finish(), which fills in the fields every engine
derives the same way and returns an immutable DeliveryStatus.
"""

from collections import namedtuple

from Bouncer import bn_cfg
from Bouncer import Utils

FIELDS = (
    'recipient',
    'status',
    'diagnosis',
    'command',
    'action',
    'date',
    'lhost',
    'rhost',
    'agent',
    'spec',
    'replycode',
    )



class DeliveryStatus(namedtuple('DeliveryStatus', FIELDS)):
    """One recipient's delivery status.  Every field is a string."""
    __slots__ = ()


class Draft(object):
    """A delivery status under construction.

    session_error is bookkeeping for the engine that owns the draft and never
    makes it into the finished record.
    """
    def __init__(self, **kws):
        for name in FIELDS:
            setattr(self, name, kws.get(name))
        self.session_error = False

    def __repr__(self):
        return '<Draft for %r>' % self.recipient



def action_for(code):
    """Map a DSN status or SMTP reply code to a DSN action."""
    if not code:
        return ''
    if code[0] == '5':
        return 'failed'
    if code[0] == '4':
        return 'delayed'
    if code[0] == '2':
        return 'delivered'
    return ''


def finish(draft, mhead, agent):
    """Fill the fields of draft that are derived the same way everywhere.

    The local and remote hosts come from the outermost message's Received:
    chain when the engine did not find them: the `from' host of the first
    header is our side, the `by' host of the last header is theirs.
    """
    received = mhead.get('received') or []
    if received:
        if not draft.lhost:
            draft.lhost = Utils.received_hosts(received[0])[0]
        if not draft.rhost:
            draft.rhost = Utils.received_hosts(received[-1])[1]
    if not draft.spec:
        draft.spec = bn_cfg.DEFAULT_SPEC
    draft.agent = agent
    if not draft.date:
        draft.date = mhead.get('date')
    if not draft.status:
        draft.status = Utils.find_status(draft.diagnosis)
    if not draft.replycode:
        draft.replycode = Utils.find_replycode(draft.diagnosis)
    if not draft.action:
        draft.action = action_for(draft.status or draft.replycode)
    return DeliveryStatus(**dict(
        (name, getattr(draft, name) or '') for name in FIELDS))
