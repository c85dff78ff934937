"""
Tests for the kisan vendor console
"""
import pytest
from unittest.mock import patch

from app.cli import main
from app.services.auth_service import pwd_context


@pytest.fixture
def console_backend(seeded_backend):
    seeded_backend.tables['vendors'][0]['hashed_password'] = pwd_context.hash('secret1')
    with patch('app.cli.get_data_backend', return_value=seeded_backend):
        yield seeded_backend


@pytest.fixture
def session_args(tmp_path):
    return ['--session-file', str(tmp_path / 'session.json')]


class TestVendorConsole:
    def test_login_then_whoami(self, console_backend, session_args, capsys):
        assert main(session_args + ['login', '--email', 'ravi@farms.test', '--password', 'secret1']) == 0
        assert main(session_args + ['whoami']) == 0

        out = capsys.readouterr().out
        assert 'Logged in as Ravi Farms' in out
        assert 'Ravi Farms <ravi@farms.test> (vendor 7)' in out

    def test_wrong_password(self, console_backend, session_args, capsys):
        code = main(session_args + ['login', '--email', 'ravi@farms.test', '--password', 'nope'])

        assert code == 1
        assert 'Invalid credentials' in capsys.readouterr().err

    def test_commands_need_a_session(self, console_backend, session_args, capsys):
        assert main(session_args + ['orders']) == 1
        assert 'please log in' in capsys.readouterr().err

    def test_orders_and_advance(self, console_backend, session_args, capsys):
        # Arrange
        main(session_args + ['login', '--email', 'ravi@farms.test', '--password', 'secret1'])

        # Act
        assert main(session_args + ['orders']) == 0
        assert main(session_args + ['advance', '42', 'shipped']) == 0

        # Assert
        out = capsys.readouterr().out
        assert '750.00' in out
        assert 'Order 42: processing -> shipped' in out
        assert console_backend.tables['orders'][0]['status'] == 'shipped'

    def test_refused_advance(self, console_backend, session_args, capsys):
        main(session_args + ['login', '--email', 'ravi@farms.test', '--password', 'secret1'])

        assert main(session_args + ['advance', '42', 'delivered']) == 1
        assert "Cannot change order status from 'processing' to 'delivered'" in capsys.readouterr().err
        assert console_backend.tables['orders'][0]['status'] == 'processing'

    def test_logout(self, console_backend, session_args, capsys):
        main(session_args + ['login', '--email', 'ravi@farms.test', '--password', 'secret1'])

        assert main(session_args + ['logout']) == 0
        assert main(session_args + ['whoami']) == 1

    def test_catalog(self, console_backend, session_args, capsys):
        assert main(session_args + ['catalog', '--category', 'Vegetables']) == 0

        out = capsys.readouterr().out
        assert 'Categories: All | Vegetables' in out
        assert '[11] Tomatoes (1 kg) (Vegetables)' in out
