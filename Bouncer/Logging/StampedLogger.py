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

"""Logger that prefixes every line with a time stamp and the process id."""

import os
import time

from Bouncer.Logging.Logger import Logger



class StampedLogger(Logger):
    """Record messages with time stamp and label.

    The stamp is written at the beginning of each line, so a message written
    in several pieces still gets only one stamp per physical line.
    """
    def __init__(self, category, label=None, nofail=1, immediate=0):
        self.label = label
        self.__bol = 1
        Logger.__init__(self, category, nofail, immediate)

    def write(self, msg):
        if not msg:
            return
        if self.label is None:
            label = '(%d) ' % os.getpid()
        else:
            label = '%s(%d): ' % (self.label, os.getpid())
        lines = msg.splitlines(True)
        out = []
        for line in lines:
            if self.__bol:
                stamp = time.strftime('%b %d %H:%M:%S %Y ',
                                      time.localtime(time.time()))
                out.append(stamp + label + line)
            else:
                out.append(line)
            self.__bol = line.endswith('\n')
        Logger.write(self, ''.join(out))
