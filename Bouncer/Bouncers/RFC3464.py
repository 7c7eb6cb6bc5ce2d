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

"""Parse RFC 3464 (i.e. DSN) bounce formats.

This works on the text of the report rather than on its MIME structure, so
it shares its tolerance for broken reports with the other engines.  The
message/delivery-status part gives the per-recipient fields, the
message/rfc822 or text/rfc822-headers part the original headers.
"""

import re
from enum import IntEnum

from Bouncer import Utils
from Bouncer.DeliveryStatus import Draft, finish
from Bouncer.Bouncers.Embedded import HeaderCollector

AGENT = 'RFC3464'
DESCRIPTION = 'Delivery status notifications (RFC 3464)'

SIGNATURE = (
    ('content-type', re.compile(r'multipart/report', re.IGNORECASE)),
    ('content-type', re.compile(r'report-type="?delivery-status',
                                re.IGNORECASE)),
    )

scre = re.compile(r'^Content-Type:\s*message/delivery-status', re.IGNORECASE)
mcre = re.compile(r'^Content-Type:\s*(?:message/rfc822|text/rfc822-headers)',
                  re.IGNORECASE)
fcre = re.compile(r'^(?P<name>[-A-Za-z]+):\s*(?P<value>.*)$')



class Zone(IntEnum):
    PREAMBLE = 0
    REPORT = 1
    EMBEDDED = 2


def _typed(value):
    # `rfc822; user@example.com' -> (`rfc822', `user@example.com')
    if ';' in value:
        kind, value = value.split(';', 1)
        return kind.strip(), value.strip()
    return '', value.strip()


class Report(object):
    """Build draft records from the fields of a message/delivery-status part.

    Each Final-Recipient: field opens a new record; the fields following it
    fill that record in.
    """
    def __init__(self):
        self.drafts = []
        self.current = None
        self.reporting = ''
        self._field = None

    def feed(self, line):
        if line[:1] in (' ', '\t'):
            # Only Diagnostic-Code: is worth unfolding
            if self._field == 'diagnostic-code' and self.current is not None:
                self.current.diagnosis = '%s %s' % (
                    self.current.diagnosis or '', line.strip())
            return
        mo = fcre.match(line)
        if not mo:
            self._field = None
            return
        name = mo.group('name').lower()
        value = mo.group('value').strip()
        self._field = name
        if name == 'reporting-mta':
            self.reporting = _typed(value)[1]
        elif name == 'final-recipient':
            self.current = Draft(recipient=Utils.bare_address(_typed(value)[1]))
            self.drafts.append(self.current)
        elif self.current is None:
            # Per-message fields we don't care about
            return
        elif name == 'action':
            # Some MTAs have been observed that put comments on the action.
            self.current.action = value.split()[0].lower() if value else ''
        elif name == 'status':
            self.current.status = Utils.find_status(value)
        elif name == 'remote-mta':
            self.current.rhost = _typed(value)[1]
        elif name == 'last-attempt-date':
            self.current.date = value
        elif name == 'diagnostic-code':
            kind, text = _typed(value)
            self.current.diagnosis = text
            if kind:
                self.current.spec = kind.upper()



def scan(mhead, mbody, accepted=None, longfields=None):
    """Return (records, rfc822 headers) for a DSN report, or None."""
    if not mhead or not mbody:
        return None
    if not Utils.match_headers(SIGNATURE, mhead):
        return None
    zone = Zone.PREAMBLE
    report = Report()
    headers = HeaderCollector(accepted, longfields)
    for line in mbody.splitlines():
        line = line.rstrip()
        if zone < Zone.REPORT and scre.match(line):
            zone = Zone.REPORT
        elif zone < Zone.EMBEDDED and mcre.match(line):
            zone = Zone.EMBEDDED
        elif zone == Zone.EMBEDDED:
            headers.feed(line)
        elif zone == Zone.REPORT:
            report.feed(line)
    if zone < Zone.REPORT:
        return None
    drafts = [draft for draft in report.drafts if draft.recipient]
    if not drafts:
        addr = Utils.bare_address(headers.header('to'))
        if not addr:
            return None
        drafts = [Draft(recipient=addr)]
    records = []
    for draft in drafts:
        if not draft.lhost:
            draft.lhost = report.reporting
        draft.diagnosis = Utils.sweep(draft.diagnosis)
        records.append(finish(draft, mhead, AGENT))
    return records, headers.blob
