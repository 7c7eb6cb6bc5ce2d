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

"""Collect the headers of the original message embedded in a bounce."""

import re

from Bouncer import bn_cfg
from Bouncer.Utils import EMPTYSTRING, NL, SPACE

fcre = re.compile(r'^(?P<name>[-0-9A-Za-z]+?):[ \t]*\S')



class HeaderCollector(object):
    """Accumulate a whitelisted subset of header lines, one line at a time.

    accepted is the set of header names to keep; longfields is the subset
    of those whose values may continue on indented lines.  Both default to
    the site configuration.  Once a blank line follows a long field, that
    field takes no more continuations.
    """
    def __init__(self, accepted=None, longfields=None):
        if accepted is None:
            accepted = bn_cfg.RFC822_HEADERS
        if longfields is None:
            longfields = bn_cfg.RFC822_LONG_HEADERS
        self._accepted = frozenset(name.lower() for name in accepted)
        self._longfields = frozenset(name.lower() for name in longfields)
        self._lines = []
        self._current = None
        self._closed = set()

    def feed(self, line):
        mo = fcre.match(line)
        if mo:
            name = mo.group('name').lower()
            if name in self._accepted:
                self._current = name
                self._lines.append(line)
            else:
                self._current = None
        elif not line.strip():
            if self._current:
                self._closed.add(self._current)
        elif line[0] in ' \t':
            if (self._current in self._longfields and
                    self._current not in self._closed):
                self._lines.append(line)
        else:
            self._current = None

    @property
    def blob(self):
        if not self._lines:
            return EMPTYSTRING
        return NL.join(self._lines) + NL

    def header(self, name):
        """Return the unfolded value of the first named header, or ''."""
        name = name.lower()
        value = None
        for line in self._lines:
            if value is not None:
                if line[0] not in ' \t':
                    break
                value.append(line.strip())
                continue
            mo = fcre.match(line)
            if mo and mo.group('name').lower() == name:
                value = [line.split(':', 1)[1].strip()]
        if value is None:
            return EMPTYSTRING
        return SPACE.join(value)
