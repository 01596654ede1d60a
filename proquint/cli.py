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

import argparse, logging, sys, json
from enum import Enum, auto
from functools import partial
from ipaddress import IPv4Address

import yaml

from .quint import encode, decode, randomQuint, widths, DecodeError
from .address import ipv4ToQuint, quintToIpv4
from .config import CONFIG_PATHS, DEFAULT_WIDTH, DEFAULT_LENGTH

logger = logging.getLogger ('cli')

class Formatter (Enum):
	HUMAN = auto ()
	YAML = auto ()
	JSON = auto ()

def formatResult (args, r, human=None):
	if args.format == Formatter.HUMAN:
		if human:
			print (human)
	elif args.format == Formatter.YAML:
		yaml.dump (r, sys.stdout)
		sys.stdout.write ('---\n')
	elif args.format == Formatter.JSON:
		json.dump (r, sys.stdout)
		sys.stdout.write ('\n')
	else:
		assert False

def doHelp (parser, args):
	parser.print_help ()
	return 0

def doEncode (args):
	""" Encode integers """
	for v in args.value:
		q = encode (v, args.width)
		formatResult (args, dict (value=v, width=args.width, quint=q), q)
	return 0

def doDecode (args):
	""" Decode proquints into integers """
	for q in args.quint:
		v = decode (q, args.width)
		formatResult (args, dict (value=v, width=args.width, quint=q), str (v))
	return 0

def doIp (args):
	""" Encode IPv4 addresses """
	for addr in args.address:
		q = ipv4ToQuint (addr)
		formatResult (args, dict (address=str (addr), quint=q), q)
	return 0

def doUnip (args):
	""" Decode proquints into IPv4 addresses """
	for q in args.quint:
		addr = '.'.join (map (str, quintToIpv4 (q)))
		formatResult (args, dict (address=addr, quint=q), addr)
	return 0

def doRandom (args):
	q = randomQuint (args.length)
	formatResult (args, dict (quint=q), q)
	return 0

def parseUint (s):
	""" Decimal or prefixed (0x, 0o, 0b) unsigned integer """
	v = int (s, 0)
	if v < 0:
		raise ValueError (s)
	return v

def parseWidth (s):
	v = int (s)
	if v not in widths:
		raise argparse.ArgumentTypeError (f'width must be one of {sorted (widths)}')
	return v

def parseFormat (s):
	try:
		return Formatter[s.upper ()]
	except (KeyError, AttributeError):
		raise argparse.ArgumentTypeError (f'unknown format {s}') from None

def readConfig (paths):
	""" Merge YAML config files, later ones win. Missing files are skipped """
	config = dict ()
	for f in paths:
		try:
			with open (f) as fd:
				d = yaml.safe_load (fd) or {}
			if not isinstance (d, dict):
				raise ValueError (f'{f} does not contain a mapping')
			config.update (d)
		except yaml.YAMLError as e:
			raise ValueError (f'cannot parse {f}: {e}') from e
		except FileNotFoundError:
			pass
	return config

def mergeConfig (args, config):
	""" Fill arguments not given on the command line from config """
	for key, parse, default in (('format', parseFormat, 'human'),
			('width', parseWidth, DEFAULT_WIDTH)):
		if key in args and getattr (args, key) is None:
			try:
				setattr (args, key, parse (config.get (key, default)))
			except (ValueError, TypeError, argparse.ArgumentTypeError) as e:
				raise ValueError (f'invalid config value for {key}: {e}') from e

def main (argv=None):
	parser = argparse.ArgumentParser(description='Convert integers and IPv4 addresses to proquints and back.')
	parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
	parser.add_argument('-c', '--config', action='append',
			default=list (CONFIG_PATHS), help='Configuration file')
	parser.add_argument('-f', '--format', type=parseFormat, help='Output format')
	parser.set_defaults (func=partial (doHelp, parser))
	subparsers = parser.add_subparsers ()

	parserEncode = subparsers.add_parser('encode', help='Encode unsigned integers')
	parserEncode.add_argument('-w', '--width', type=parseWidth, help='Integer width in bits')
	parserEncode.add_argument('value', nargs='+', type=parseUint, help='Integer, decimal or 0x-prefixed')
	parserEncode.set_defaults(func=doEncode)

	parserDecode = subparsers.add_parser('decode', help='Decode proquints into integers')
	parserDecode.add_argument('-w', '--width', type=parseWidth, help='Integer width in bits')
	parserDecode.add_argument('quint', nargs='+', help='Proquint')
	parserDecode.set_defaults(func=doDecode)

	parserIp = subparsers.add_parser('ip', help='Encode IPv4 addresses')
	parserIp.add_argument('address', nargs='+', type=IPv4Address, help='Dotted quad')
	parserIp.set_defaults(func=doIp)

	parserUnip = subparsers.add_parser('unip', help='Decode proquints into IPv4 addresses')
	parserUnip.add_argument('quint', nargs='+', help='Proquint')
	parserUnip.set_defaults(func=doUnip)

	parserRandom = subparsers.add_parser('random', help='Create random identifier')
	parserRandom.add_argument('-n', '--length', type=int, default=DEFAULT_LENGTH, help='Number of quints')
	parserRandom.set_defaults(func=doRandom)

	args = parser.parse_args(argv)
	logformat = '{message}'
	if args.verbose:
		logging.basicConfig (level=logging.DEBUG, format=logformat, style='{')
	else:
		logging.basicConfig (level=logging.INFO, format=logformat, style='{')

	# read config and merge with args
	try:
		config = readConfig (args.config)
		logger.debug (f'using config {config}')
		mergeConfig (args, config)
	except ValueError as e:
		logger.error (f'Invalid configuration: {e}')
		if args.format is None:
			args.format = Formatter.HUMAN
		formatResult (args, dict (status='invalid_value'), None)
		return 1

	try:
		return args.func (args)
	except DecodeError as e:
		logger.error (f'Cannot decode: {e}')
		formatResult (args, dict (status='decode_error',
				quint=e.text,
				piece=e.piece,
				position=e.position), None)
		return 2
	except ValueError as e:
		logger.error (f'Invalid value: {e}')
		formatResult (args, dict (status='invalid_value'), None)
		return 1
