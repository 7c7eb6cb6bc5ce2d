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

"""Base class for tests that scan sample bounces."""

import os
import email
import shutil
import tempfile
import unittest

from Bouncer import bn_cfg
from Bouncer import Message
from Bouncer.Logging.Syslog import syslog

BOUNCES = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'bounces')

# A header map that the Sendmail 5 engine accepts.
V5HEAD = {
    'from': 'Mail Delivery Subsystem <MAILER-DAEMON@mx.example.jp>',
    'subject': 'Returned mail: User unknown',
    'date': 'Mon, 2 Jan 1995 09:59:58 +0900',
    'received': [],
    }

TRANSCRIPT = '   ----- Transcript of session follows -----\n'
UNSENT = '   ----- Unsent message follows -----\n'
NOT_COLLECTED = '   ----- No message was collected -----\n'



def load(filename):
    with open(os.path.join(BOUNCES, filename), 'rb') as fp:
        return email.message_from_binary_file(fp)


def headers_and_body(filename):
    msg = load(filename)
    return Message.headers_of(msg), Message.body_of(msg)


class BounceBase(unittest.TestCase):
    """Keeps the log files of a test in a private directory."""
    def setUp(self):
        self._logdir = tempfile.mkdtemp()
        self._saved_logdir = bn_cfg.LOG_DIR
        bn_cfg.LOG_DIR = self._logdir
        syslog.close()

    def tearDown(self):
        syslog.close()
        bn_cfg.LOG_DIR = self._saved_logdir
        shutil.rmtree(self._logdir, ignore_errors=True)

    def _readlog(self, kind):
        path = os.path.join(self._logdir, kind)
        if not os.path.exists(path):
            return ''
        with open(path, encoding='iso-8859-1') as fp:
            return fp.read()
