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

# see https://arxiv.org/html/0901.4016 on how to build proquints (human
# pronouncable unique ids)

import secrets, logging, operator

logger = logging.getLogger (__name__)

toConsonant = 'bdfghjklmnprstvz'
toVowel = 'aiou'
fromConsonant = {c: i for i, c in enumerate (toConsonant)}
fromVowel = {c: i for i, c in enumerate (toVowel)}

separator = '-'
# bit width → number of syllables
widths = {16: 1, 32: 2, 64: 4}

class QuintException (Exception):
	pass

class DecodeError (QuintException, ValueError):
	""" Input is not a valid proquint """

	def __init__ (self, message, text, piece=None, position=None):
		super ().__init__ (message, text, piece, position)

	def __str__ (self):
		return self.args[0]

	@property
	def text (self):
		return self.args[1]

	@property
	def piece (self):
		""" Index of the offending syllable, if known """
		return self.args[2]

	@property
	def position (self):
		""" Character position inside the offending syllable, if known """
		return self.args[3]

def toUint (v):
	""" Integer value of v, ValueError for anything else (floats, strings) """
	try:
		return operator.index (v)
	except TypeError:
		raise ValueError (f'{v!r} is not an integer') from None

def u16ToQuint (v):
	""" Transform a 16 bit unsigned integer into a single quint """
	v = toUint (v)
	if not 0 <= v < 2**16:
		raise ValueError (f'{v} does not fit into 16 bits')
	# quints are “big-endian”
	return ''.join ([
			toConsonant[(v>>(4+2+4+2))&0xf],
			toVowel[(v>>(4+2+4))&0x3],
			toConsonant[(v>>(4+2))&0xf],
			toVowel[(v>>4)&0x3],
			toConsonant[(v>>0)&0xf],
			])

def quintToU16 (s):
	""" Transform a single quint back into a 16 bit unsigned integer """
	if len (s) != 5:
		raise DecodeError (f'quint {s!r} must have 5 characters, not {len (s)}', s)

	v = 0
	for i, c in enumerate (s):
		# consonants at even positions, vowels at odd ones
		table, bits = (fromConsonant, 4) if i % 2 == 0 else (fromVowel, 2)
		try:
			v = (v<<bits) | table[c]
		except KeyError:
			kind = 'consonant' if bits == 4 else 'vowel'
			raise DecodeError (f'expected {kind} at position {i} of {s!r}, got {c!r}',
					s, position=i) from None
	return v

def uintToQuint (v, length=2):
	""" Turn any integer into a proquint with fixed length """
	v = toUint (v)
	if not 0 <= v < 2**(length*16):
		raise ValueError (f'{v} does not fit into {length} quints')

	return separator.join (reversed ([u16ToQuint ((v>>(x*16))&0xffff) for x in range (length)]))

def quintToUint (s, length=2):
	""" Turn a proquint of exactly length quints back into an integer """
	pieces = s.split (separator)
	if len (pieces) < length:
		raise DecodeError (f'proquint too small, expected {length} quints, got {len (pieces)}', s)
	elif len (pieces) > length:
		raise DecodeError (f'proquint too large, expected {length} quints, got {len (pieces)}', s)

	v = 0
	for i, p in enumerate (pieces):
		try:
			v = (v<<16) | quintToU16 (p)
		except DecodeError as e:
			logger.debug (f'quint {i} of {s!r} is invalid: {e}')
			raise DecodeError (f'quint {i} of {s!r} is invalid: {e}', s,
					piece=i, position=e.position) from e
	return v

def widthToLength (width):
	try:
		return widths[width]
	except KeyError:
		raise ValueError (f'unsupported width {width}, use one of {sorted (widths)}') from None

def encode (value, width=32):
	""" Encode an unsigned integer of width bits """
	return uintToQuint (value, widthToLength (width))

def decode (text, width=32):
	""" Decode a proquint into an unsigned integer of width bits """
	return quintToUint (text, widthToLength (width))

def randomQuint (length=4):
	""" Random identifier with length quints """
	if length < 1:
		raise ValueError (f'need at least one quint, got {length}')
	return uintToQuint (secrets.randbelow (2**(length*16)), length)
