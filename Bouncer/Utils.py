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


"""Miscellaneous essential routines.

This includes bare address extraction, host name recovery from Received:
headers, whitespace clean up of error texts and the lookups of DSN status
codes and SMTP reply codes buried in them.
"""

import re
import ipaddress
from email.utils import parseaddr

EMPTYSTRING = ''
SPACE = ' '
NL = '\n'

# A bare local@domain address and not much more.
_bare = re.compile(r'\A[^\s<>]+@[^\s<>]+\Z')
# An address inside angle brackets, anywhere in a string.
_angle = re.compile(r'<(?P<addr>[^\s<>]+@[^\s<>]+)>')
# A MIME boundary glued to the end of an error message.
_boundary = re.compile(r' -{2,}[^ ].+$')
# DSN status codes are class.subject.detail; the class is 2, 4 or 5.
_status = re.compile(r'(?<![\d.])(?P<status>[245]\.\d{1,3}\.\d{1,3})(?![\d.]*\d)')
_replycode = re.compile(r'(?<![\d.])(?P<code>[245][0-5]\d)(?!\d)')
# The `from' and `by' clauses of a Received: header.
_rfrom = re.compile(r'\bfrom\s+(?P<host>[^\s;()]+)(?:\s+\((?P<comment>[^)]*)\))?',
                    re.IGNORECASE)
_rby = re.compile(r'\bby\s+(?P<host>[^\s;()]+)', re.IGNORECASE)
_fqdn = re.compile(r'\A[a-z0-9-]+(\.[a-z0-9-]+)+\Z', re.IGNORECASE)



def is_address(s):
    """Return true if s is a bare local@domain address."""
    return bool(s) and _bare.match(s) is not None


def angle_address(s):
    """Return the first <local@domain> address found in s, or ''."""
    mo = _angle.search(s or '')
    if mo:
        return mo.group('addr')
    return EMPTYSTRING


def bare_address(value):
    """Return the bare address of a mailbox field such as a To: header.

    `Neko <neko@example.jp>' and `neko@example.jp (Neko)' both give
    `neko@example.jp'.  The empty string is returned if no address is found.
    """
    if not value:
        return EMPTYSTRING
    realname, addr = parseaddr(value)
    if is_address(addr):
        return addr
    addr = angle_address(value)
    if addr:
        return addr
    for token in value.split():
        token = token.strip('<>(),;"\'')
        if is_address(token):
            return token
    return EMPTYSTRING


def sweep(s):
    """Collapse runs of white space and trim the ends of s.

    A trailing MIME boundary, left behind when an error message runs into the
    next body part, is cut off too.  None gives the empty string.
    """
    if not s:
        return EMPTYSTRING
    s = SPACE.join(s.split())
    return _boundary.sub(EMPTYSTRING, s)


def find_status(s):
    """Return the first DSN status code (e.g. 5.1.1) in s, or ''."""
    mo = _status.search(s or '')
    if mo:
        return mo.group('status')
    return EMPTYSTRING


def find_replycode(s):
    """Return the first SMTP reply code (e.g. 550) in s, or ''."""
    mo = _replycode.search(s or '')
    if mo:
        return mo.group('code')
    return EMPTYSTRING


def is_ipaddr(s):
    try:
        ipaddress.ip_address(s)
    except ValueError:
        return False
    return True


def _cleanhost(token):
    token = token.strip('[]();')
    if token.lower().startswith('ipv6:'):
        token = token[5:]
    return token.rstrip('.')


def received_hosts(value):
    """Return the (from, by) host names of a Received: header value.

    When the `from' clause names something that is not a fully qualified
    host, e.g. `from localhost (mx.example.org [192.0.2.1])', the name or
    address in the comment is used instead.  Missing parts are ''.
    """
    fromhost = byhost = EMPTYSTRING
    value = SPACE.join((value or EMPTYSTRING).split())
    rest = value
    mo = _rfrom.search(value)
    if mo:
        fromhost = _cleanhost(mo.group('host'))
        comment = mo.group('comment')
        if comment and not _fqdn.match(fromhost) and not is_ipaddr(fromhost):
            for token in comment.split():
                token = _cleanhost(token)
                if _fqdn.match(token) or is_ipaddr(token):
                    fromhost = token
                    break
        rest = value[mo.end():]
    mo = _rby.search(rest)
    if mo:
        byhost = _cleanhost(mo.group('host'))
    return fromhost, byhost


def match_headers(signature, mhead):
    """Return true if every (name, cre) pair of signature matches mhead.

    mhead maps lower case header names to their values.  A missing header
    never matches.
    """
    for name, cre in signature:
        value = mhead.get(name)
        if not value or not cre.search(value):
            return False
    return True
