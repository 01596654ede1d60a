# Copyright 2019–2020 Leibniz Institute for Psychology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
IPv4 addresses as proquints. An address is a single big-endian 32 bit
integer, first octet most significant.
"""

from ipaddress import IPv4Address

from .quint import encode, decode, toUint

def ipv4ToQuint (addr):
	""" Encode 4-tuple of octets or IPv4Address """
	if isinstance (addr, IPv4Address):
		addr = tuple (addr.packed)
	if len (addr) != 4:
		raise ValueError (f'IPv4 address needs 4 octets, got {len (addr)}')

	v = 0
	for octet in map (toUint, addr):
		if not 0 <= octet <= 0xff:
			raise ValueError (f'octet {octet} out of range')
		v = (v<<8) | octet
	return encode (v, 32)

def quintToIpv4 (text):
	v = decode (text, 32)
	return tuple ((v>>shift)&0xff for shift in (24, 16, 8, 0))
