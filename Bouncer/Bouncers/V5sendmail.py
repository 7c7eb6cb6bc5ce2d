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

"""Parse bounces from Sendmail version 5.

Sendmail 5 writes a transcript of the SMTP session that failed, followed by
the original message or a note that none was collected, e.g.

       ----- Transcript of session follows -----
    ... while talking to mx.example.org.:
    >>> RCPT To:<kijitora@example.org>
    <<< 550 <kijitora@example.org>... User unknown
    550 <kijitora@example.org>... User unknown

       ----- Unsent message follows -----
    Received: from ...
    To: kijitora@example.org

The transcript gives one record per `550 <addr>... text' line.  When it has
none, the To: header of the original message names the recipient.  A body
that never reaches the original message is not one of ours.
"""

import re
from enum import IntEnum

from Bouncer import Utils
from Bouncer.DeliveryStatus import Draft, finish
from Bouncer.Bouncers.Embedded import HeaderCollector

AGENT = 'V5sendmail'
DESCRIPTION = 'Sendmail version 5'

SIGNATURE = (
    ('from', re.compile(r'Mail Delivery Subsystem|MAILER-DAEMON',
                        re.IGNORECASE)),
    ('subject', re.compile(r'^Returned mail: [A-Z]')),
    )

# Zone markers, see savemail.c
tcre = re.compile(r'^\s+-+ Transcript of session follows -+$')
mcre = re.compile(r'^\s+----- (?:Unsent message follows|'
                  r'No message was collected) -----')
# ... while talking to mx.example.org.:
ecre = re.compile(r'^\.+ while talking to .+:$')
# 550 <kijitora@example.org>... User unknown
rcre = re.compile(r'^(?P<code>\d{3})\s+<(?P<addr>[^ ]+@[^ ]+)>\.{3}\s*'
                  r'(?P<text>.+)$')
# >>> RCPT To:<kijitora@example.org>
ccre = re.compile(r'^>{3}\s*(?P<verb>[A-Z]{4})\s*')
# <<< 550 Requested User Mailbox not found. No such user here.
icre = re.compile(r'^<{3} +(?P<text>.+)$')
# 421 example.org (smtp)... Deferred: Connection timed out
gcre = re.compile(r'^\d{3}\s+.+\.{3}\s*(?P<text>.+)$')



class Zone(IntEnum):
    PREAMBLE = 0
    TRANSCRIPT = 1
    EMBEDDED = 2


def _advance(zone, line):
    """Return the zone that line opens, or None.  Zones never go back."""
    if zone < Zone.TRANSCRIPT and tcre.match(line):
        return Zone.TRANSCRIPT
    if zone < Zone.EMBEDDED and mcre.match(line):
        return Zone.EMBEDDED
    return None


class Transcript(object):
    """Build draft records from the lines of an SMTP session transcript.

    Commands and responses are filed under the number of recipients seen so
    far, so the ones preceding a recipient's result line belong to it.
    """
    def __init__(self):
        self.drafts = []
        self.current = Draft()
        self.recipients = 0
        self.commands = {}
        self.responses = {}
        self.fallback = ''

    def feed(self, line):
        mo = rcre.match(line)
        if mo:
            if self.current.recipient:
                self.drafts.append(self.current)
                self.current = Draft()
            diagnosis = mo.group('text')
            response = self.responses.get(self.recipients)
            if response:
                diagnosis += ': ' + response
            self.current.recipient = mo.group('addr')
            self.current.diagnosis = diagnosis
            self.current.replycode = mo.group('code')
            self.recipients += 1
            return
        mo = ccre.match(line)
        if mo:
            self.commands[self.recipients] = mo.group('verb')
            return
        mo = icre.match(line)
        if mo:
            self.responses[self.recipients] = mo.group('text')
            return
        if self.current.session_error:
            return
        if ecre.match(line):
            self.current.session_error = True
            return
        mo = gcre.match(line)
        if mo and not self.fallback:
            self.fallback = mo.group('text')

    def close(self):
        """Return every draft, the one still open last."""
        return self.drafts + [self.current]



def _normalize(mhead, transcript, headers):
    drafts = transcript.close()
    if not transcript.recipients:
        addr = Utils.bare_address(headers.header('to'))
        if not addr:
            return None
        drafts[0].recipient = addr
    records = []
    for index, draft in enumerate(drafts):
        draft.command = transcript.commands.get(index, '')
        draft.diagnosis = Utils.sweep(transcript.fallback or
                                      transcript.responses.get(index) or
                                      draft.diagnosis)
        if not Utils.is_address(draft.recipient):
            # e.g. `<@example.jp>... Host unknown', the address is in the text
            addr = Utils.angle_address(draft.diagnosis)
            if addr:
                draft.recipient = addr
        records.append(finish(draft, mhead, AGENT))
    return records


def scan(mhead, mbody, accepted=None, longfields=None):
    """Return (records, rfc822 headers) for a Sendmail 5 bounce, or None.

    mhead maps lower case header names of the bounce to their values, with
    `received' holding the list of all Received: headers.  accepted and
    longfields select the headers copied out of the original message, see
    HeaderCollector.
    """
    if not mhead or not mbody:
        return None
    if not Utils.match_headers(SIGNATURE, mhead):
        return None
    zone = Zone.PREAMBLE
    transcript = Transcript()
    headers = HeaderCollector(accepted, longfields)
    for line in mbody.splitlines():
        line = line.rstrip()
        nextzone = _advance(zone, line)
        if nextzone is not None:
            zone = nextzone
        elif zone == Zone.EMBEDDED:
            headers.feed(line)
        elif zone == Zone.TRANSCRIPT and line:
            transcript.feed(line)
    if zone < Zone.EMBEDDED:
        return None
    records = _normalize(mhead, transcript, headers)
    if records is None:
        return None
    return records, headers.blob
