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

"""Read bounces out of a Unix mbox file."""

import mailbox

import email
from email.errors import MessageParseError

from Bouncer.Bouncers import BouncerAPI
from Bouncer.Logging.Syslog import syslog



def _safeparser(fp):
    try:
        return email.message_from_binary_file(fp)
    except MessageParseError:
        # Don't return None since that will stop a mailbox iterator
        return ''


class BounceMailbox(mailbox.mbox):
    """A read-only mbox whose unparseable messages are skipped, not fatal."""
    def __init__(self, path):
        mailbox.mbox.__init__(self, path, _safeparser, create=False)

    def messages(self):
        """Yield (key, msg) for every message that could be parsed."""
        for key, msg in self.iteritems():
            if msg == '':
                syslog('error', 'Skipping unparseable message %s in %s',
                       key, self._path)
                continue
            yield key, msg

    def scan_all(self, pipeline=None):
        """Yield (key, msg, result) where result is as for ScanMessage()."""
        for key, msg in self.messages():
            yield key, msg, BouncerAPI.ScanMessage(msg, pipeline)
