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

import json

import pytest
import yaml

from .cli import main, readConfig

def test_help (capsys):
	assert main ([]) == 0
	assert 'usage' in capsys.readouterr ().out

@pytest.mark.parametrize("argv,expected", [
	pytest.param (['encode', '0x7f000001'], 'lusab-babad', id='encode-hex'),
	pytest.param (['encode', '-w', '16', '12'], 'babas', id='encode-16'),
	pytest.param (['encode', '-w', '64', '0'], 'babab-babab-babab-babab', id='encode-64'),
	pytest.param (['decode', 'rotab-vinat'], '3141592653', id='decode'),
	pytest.param (['ip', '127.0.0.1'], 'lusab-babad', id='ip'),
	pytest.param (['unip', 'gutih-tugad'], '63.84.220.193', id='unip'),
	])
def test_human (capsys, argv, expected):
	assert main (argv) == 0
	assert capsys.readouterr ().out == expected + '\n'

def test_multiple (capsys):
	assert main (['encode', '1', '2']) == 0
	assert capsys.readouterr ().out.split () == ['babab-babad', 'babab-babaf']

def test_json (capsys):
	assert main (['-f', 'json', 'decode', 'rotab-vinat']) == 0
	out = json.loads (capsys.readouterr ().out)
	assert out == dict (value=3141592653, width=32, quint='rotab-vinat')

def test_yaml (capsys):
	assert main (['-f', 'yaml', 'unip', 'lusab-babad']) == 0
	out = capsys.readouterr ().out
	assert out.endswith ('---\n')
	assert yaml.safe_load (out.split ('---')[0]) == dict (address='127.0.0.1', quint='lusab-babad')

def test_random (capsys):
	assert main (['random', '-n', '2']) == 0
	assert len (capsys.readouterr ().out.strip ().split ('-')) == 2

def test_decode_error (capsys):
	assert main (['-f', 'json', 'decode', 'lusab-bbbad']) == 2
	out = json.loads (capsys.readouterr ().out)
	assert out == dict (status='decode_error', quint='lusab-bbbad', piece=1, position=1)

def test_invalid_value (capsys):
	assert main (['-f', 'json', 'encode', '-w', '16', '70000']) == 1
	assert json.loads (capsys.readouterr ().out) == dict (status='invalid_value')

@pytest.mark.parametrize("argv", [
	pytest.param (['encode', '-w', '48', '1'], id='width'),
	pytest.param (['encode', '-1'], id='negative'),
	pytest.param (['encode', 'foo'], id='not-a-number'),
	pytest.param (['ip', '127.0.0'], id='address'),
	pytest.param (['-f', 'xml', 'encode', '1'], id='format'),
	])
def test_bad_arguments (argv):
	with pytest.raises (SystemExit):
		main (argv)

def test_config (tmp_path, capsys):
	config = tmp_path / 'config.yaml'
	config.write_text ('width: 16\nformat: json\n')

	assert main (['-c', str (config), 'encode', '12']) == 0
	assert json.loads (capsys.readouterr ().out) == dict (value=12, width=16, quint='babas')

	# command line wins
	assert main (['-c', str (config), '-f', 'human', 'encode', '-w', '32', '12']) == 0
	assert capsys.readouterr ().out == 'babab-babas\n'

def test_readConfig (tmp_path):
	a = tmp_path / 'a.yaml'
	a.write_text ('width: 16\nformat: json\n')
	b = tmp_path / 'b.yaml'
	b.write_text ('width: 64\n')
	empty = tmp_path / 'empty.yaml'
	empty.write_text ('')

	assert readConfig ([a, tmp_path / 'missing.yaml', empty, b]) == dict (width=64, format='json')

@pytest.mark.parametrize("content", [
	pytest.param ('width: 48\n', id='width-unsupported'),
	pytest.param ('width: foo\n', id='width-not-a-number'),
	pytest.param ('width:\n', id='width-empty'),
	pytest.param ('format: xml\n', id='format-unknown'),
	pytest.param ('format: 1\n', id='format-not-a-string'),
	pytest.param ('- width\n- 16\n', id='not-a-mapping'),
	pytest.param ('width: [16\n', id='broken-yaml'),
	])
def test_bad_config (tmp_path, capsys, content):
	config = tmp_path / 'config.yaml'
	config.write_text (content)

	assert main (['-c', str (config), 'encode', '12']) == 1
	assert capsys.readouterr ().out == ''

def test_bad_config_json (tmp_path, capsys):
	config = tmp_path / 'config.yaml'
	config.write_text ('format: json\nwidth: 48\n')

	assert main (['-c', str (config), 'encode', '12']) == 1
	assert json.loads (capsys.readouterr ().out) == dict (status='invalid_value')

def test_readConfig_not_a_mapping (tmp_path):
	config = tmp_path / 'config.yaml'
	config.write_text ('- 16\n')

	with pytest.raises (ValueError):
		readConfig ([config])
