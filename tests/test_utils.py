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

"""Unit tests for the address and header helpers."""

import re
import unittest

from Bouncer import Utils



class TestAddresses(unittest.TestCase):
    def test_is_address(self):
        eq = self.assertEqual
        eq(Utils.is_address('neko@example.jp'), True)
        eq(Utils.is_address('@example.jp'), False)
        eq(Utils.is_address('neko'), False)
        eq(Utils.is_address('<neko@example.jp>'), False)
        eq(Utils.is_address('neko @example.jp'), False)
        eq(Utils.is_address(''), False)
        eq(Utils.is_address(None), False)

    def test_angle_address(self):
        eq = self.assertEqual
        eq(Utils.angle_address('550 <neko@example.jp>... User unknown'),
           'neko@example.jp')
        eq(Utils.angle_address('User unknown'), '')
        eq(Utils.angle_address(None), '')

    def test_bare_address(self):
        eq = self.assertEqual
        eq(Utils.bare_address('neko@example.jp'), 'neko@example.jp')
        eq(Utils.bare_address('Neko <neko@example.jp>'), 'neko@example.jp')
        eq(Utils.bare_address('neko@example.jp (Neko)'), 'neko@example.jp')
        eq(Utils.bare_address('"Kuro, Neko" <kuro@example.jp>'),
           'kuro@example.jp')
        eq(Utils.bare_address('undisclosed-recipients:;'), '')
        eq(Utils.bare_address(''), '')
        eq(Utils.bare_address(None), '')


class TestText(unittest.TestCase):
    def test_sweep(self):
        eq = self.assertEqual
        eq(Utils.sweep('  User \t unknown\n'), 'User unknown')
        eq(Utils.sweep('User unknown --001a113f8a8e'), 'User unknown')
        eq(Utils.sweep('Host -- unknown'), 'Host -- unknown')
        eq(Utils.sweep(None), '')
        eq(Utils.sweep(''), '')

    def test_find_status(self):
        eq = self.assertEqual
        eq(Utils.find_status('550 5.1.1 <neko@example.jp>... User unknown'),
           '5.1.1')
        eq(Utils.find_status('Status: 4.4.7 (delivery time expired)'),
           '4.4.7')
        eq(Utils.find_status('no route to host [192.0.2.5]'), '')
        eq(Utils.find_status('Mailer 5.67+1.6W'), '')
        eq(Utils.find_status(None), '')

    def test_find_replycode(self):
        eq = self.assertEqual
        eq(Utils.find_replycode('550 5.1.1 User unknown'), '550')
        eq(Utils.find_replycode('421 Deferred'), '421')
        eq(Utils.find_replycode('connect to [192.0.2.255]:25'), '')
        eq(Utils.find_replycode('User unknown'), '')
        eq(Utils.find_replycode(None), '')


class TestReceived(unittest.TestCase):
    def test_from_and_by(self):
        self.assertEqual(
            Utils.received_hosts(
                'from mx.example.jp (mx.example.jp [192.0.2.25]) by '
                'mail.example.com (8.6.12/8.6.12) with ESMTP id KAA01234'),
            ('mx.example.jp', 'mail.example.com'))

    def test_unqualified_from(self):
        self.assertEqual(
            Utils.received_hosts(
                'from localhost (relay.example.org [192.0.2.1]) '
                'by mx.example.jp with SMTP id AA00001'),
            ('relay.example.org', 'mx.example.jp'))
        self.assertEqual(
            Utils.received_hosts(
                'from unknown (HELO neko) ([192.0.2.1]) by mx.example.jp'),
            ('unknown', 'mx.example.jp'))
        self.assertEqual(
            Utils.received_hosts(
                'from unknown ([192.0.2.1]) by mx.example.jp'),
            ('192.0.2.1', 'mx.example.jp'))

    def test_by_only(self):
        self.assertEqual(
            Utils.received_hosts('by mx.example.jp (Postfix)\n\tid 3B8E2C0012'),
            ('', 'mx.example.jp'))

    def test_folded_and_bracketed(self):
        self.assertEqual(
            Utils.received_hosts('from [192.0.2.9]\n\tby mx.example.jp.;'
                                 ' Mon, 2 Jan 1995 09:59:58 +0900'),
            ('192.0.2.9', 'mx.example.jp'))

    def test_nothing(self):
        self.assertEqual(Utils.received_hosts(''), ('', ''))
        self.assertEqual(Utils.received_hosts(None), ('', ''))


class TestSignature(unittest.TestCase):
    def test_match_headers(self):
        signature = (('subject', re.compile(r'^Returned mail')),
                     ('from', re.compile(r'MAILER-DAEMON')))
        self.assertTrue(Utils.match_headers(signature, {
            'subject': 'Returned mail: User unknown',
            'from': 'MAILER-DAEMON@example.jp',
            }))
        self.assertFalse(Utils.match_headers(signature, {
            'subject': 'Returned mail: User unknown',
            }))
        self.assertFalse(Utils.match_headers(signature, {
            'subject': 'Re: Returned mail',
            'from': 'MAILER-DAEMON@example.jp',
            }))
        self.assertTrue(Utils.match_headers((), {}))



def suite():
    suite = unittest.TestSuite()
    for klass in (TestAddresses, TestText, TestReceived, TestSignature):
        suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(klass))
    return suite



if __name__ == '__main__':
    unittest.main(defaultTest='suite')
