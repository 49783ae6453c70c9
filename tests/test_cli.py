"""
Tests for the command line entry point.
"""

import logging

import pytest

from atlas_coords.grids import mgrs_encode
from atlas_coords.main import build_parser, main, setup_logging


@pytest.fixture
def root_logger():
    """Root logger, restored after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestTransformCommand:

    def test_wgs84_to_british_grid(self, capsys):
        assert main(['transform', '--from', 'EPSG:4326', '--to', 'EPSG:27700', '1.716', '52.658']) == 0
        easting, northing = (float(v) for v in capsys.readouterr().out.split())
        assert 600000 < easting < 700000
        assert 300000 < northing < 330000

    def test_height_is_passed_through(self, capsys):
        assert main(['transform', '--from', 'WGS84', '--to', 'WGS84', '1', '2', '3']) == 0
        assert capsys.readouterr().out.split() == ['1.000000', '2.000000', '3.000000']

    def test_unknown_definition(self, capsys):
        assert main(['transform', '--from', 'NOPE', '--to', 'WGS84', '1', '2']) == 1

    def test_grid_file(self, capsys, tmp_path, ntv2_buffer):
        path = tmp_path / 'test.gsb'
        path.write_bytes(ntv2_buffer())
        code = main(['transform', '--grid', f'test={path}',
                     '--from', '+proj=longlat +ellps=clrk66 +nadgrids=test',
                     '--to', 'WGS84', '-1.5', '50.5'])
        assert code == 0
        lon, lat = (float(v) for v in capsys.readouterr().out.split())
        assert lon == pytest.approx(-1.5 - 3.0 / 3600, abs=1e-6)
        assert lat == pytest.approx(50.5 + 3.0 / 3600, abs=1e-6)

    def test_missing_grid_file(self, tmp_path):
        assert main(['transform', '--grid', str(tmp_path / 'none.gsb'),
                     '--from', 'WGS84', '--to', 'WGS84', '1', '2']) == 1


class TestGridrefCommand:

    def test_own_region(self, capsys):
        assert main(['gridref', 'SO12']) == 0
        out = capsys.readouterr().out
        assert 'precision: 10000' in out
        assert 'region: gb' in out
        assert 'centroid (gb): 315000.000000 225000.000000' in out

    def test_invalid_reference(self):
        assert main(['gridref', 'ZZ99']) == 1


class TestMgrsCommand:

    def test_encode(self, capsys):
        assert main(['mgrs', '38.897676', '-77.036548', '--digits', '2']) == 0
        assert capsys.readouterr().out.strip().startswith('18SUJ')

    def test_decode(self, capsys):
        code = mgrs_encode(38.897676, -77.036548)
        assert main(['mgrs', '--decode', code]) == 0
        lat, lon = (float(v) for v in capsys.readouterr().out.split())
        assert lat == pytest.approx(38.8977, abs=1e-3)
        assert lon == pytest.approx(-77.0365, abs=1e-3)

    def test_missing_position(self):
        assert main(['mgrs']) == 1

    def test_bad_digits(self):
        assert main(['mgrs', '0', '0', '--digits', '9']) == 1


def test_command_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


# =============================================================================
# LOGGING
# =============================================================================

class TestSetupLogging:

    @pytest.mark.parametrize('verbose, loading_grids, level', [
        (False, False, logging.WARNING),
        (False, True, logging.INFO),
        (True, False, logging.DEBUG),
        (True, True, logging.DEBUG),
    ])
    def test_console_level(self, root_logger, verbose, loading_grids, level):
        setup_logging(verbose, loading_grids=loading_grids)
        [console] = root_logger.handlers
        assert console.level == level
        assert root_logger.level == level

    def test_console_format_has_no_timestamp(self, root_logger):
        setup_logging()
        [console] = root_logger.handlers
        record = logging.LogRecord('atlas_coords.x', logging.WARNING, __file__, 1, 'hello', None, None)
        assert console.format(record) == 'WARNING atlas_coords.x: hello'

    def test_log_file_gets_debug(self, root_logger, tmp_path):
        path = tmp_path / 'run.log'
        setup_logging(log_file=str(path))
        assert root_logger.level == logging.DEBUG
        console, file_handler = root_logger.handlers
        assert console.level == logging.WARNING
        assert file_handler.level == logging.DEBUG
        logging.getLogger('atlas_coords.test').debug('detail')
        file_handler.flush()
        assert 'DEBUG    atlas_coords.test: detail' in path.read_text()
