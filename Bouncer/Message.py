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

"""Turn an email.message.Message into what the bounce engines scan.

The engines see a header map and the body as text; they never look at the
MIME structure themselves.
"""

import re
import email.header
from email.errors import HeaderParseError

from Bouncer.Utils import EMPTYSTRING, SPACE

_headsep = re.compile(r'\r?\n\r?\n')



def oneline(value):
    # Decode header string in one line
    value = str(value)
    try:
        h = email.header.make_header(email.header.decode_header(value))
        value = str(h)
    except (LookupError, UnicodeError, ValueError, HeaderParseError):
        # possibly charset problem. return with undecoded string in one line.
        pass
    return SPACE.join(value.split())


def headers_of(msg):
    """Return the header map of msg.

    Keys are lower case header names.  `received' is the list of every
    Received: header in message order; for other headers the first one wins.
    `from', `subject', `date' and `content-type' are always present.
    """
    mhead = {
        'from': EMPTYSTRING,
        'subject': EMPTYSTRING,
        'date': EMPTYSTRING,
        'content-type': EMPTYSTRING,
        'received': [],
        }
    for name, value in msg.items():
        name = name.lower()
        if name == 'received':
            mhead['received'].append(SPACE.join(str(value).split()))
        elif not mhead.get(name):
            mhead[name] = oneline(value)
    return mhead


def body_of(msg):
    """Return the body of msg as text.

    A multipart message gives its raw body, MIME boundaries and part headers
    included, since that is where the engines find their part markers.
    """
    if msg.is_multipart():
        try:
            text = msg.as_string()
        except (UnicodeError, LookupError):
            text = msg.as_bytes().decode('us-ascii', 'replace')
        parts = _headsep.split(text, 1)
        if len(parts) < 2:
            return EMPTYSTRING
        return parts[1]
    cte = msg.get('content-transfer-encoding', EMPTYSTRING).strip().lower()
    payload = msg.get_payload()
    if isinstance(payload, str) and cte not in ('base64', 'quoted-printable'):
        return payload
    payload = msg.get_payload(decode=True)
    if payload is None:
        return EMPTYSTRING
    charset = msg.get_content_charset('us-ascii')
    try:
        return payload.decode(charset, 'replace')
    except LookupError:
        return payload.decode('us-ascii', 'replace')
