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

"""Bouncer errors."""



class BouncerError(Exception):
    """Base class for all Bouncer errors."""
    pass


class UnknownEngineError(BouncerError):
    """The bounce pipeline names an engine which does not exist."""
    def __init__(self, name=None):
        BouncerError.__init__(self, name)
        self.name = name

    def __str__(self):
        return 'Unknown bounce engine: %s' % self.name


class BadMessageError(BouncerError):
    """A file could not be parsed as an email message."""
    pass
