"""Tests for the CLI module."""

import logging
import pytest
from unittest.mock import patch, MagicMock

from smtplike.cli import setup_logging, parse_args, main
from smtplike.config import Config
from smtplike.example import ExampleContext


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_default_level_is_info(self):
        """Default logging level is INFO."""
        with patch("logging.basicConfig") as mock_config:
            setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO

    def test_verbose_level_is_debug(self):
        """Verbose logging level is DEBUG."""
        with patch("logging.basicConfig") as mock_config:
            setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG


class TestParseArgs:
    """Tests for parse_args function."""

    def test_no_args(self):
        """No arguments uses defaults."""
        with patch("sys.argv", ["smtplike-example"]):
            args = parse_args()
            assert args.config is None
            assert args.host is None
            assert args.port is None
            assert args.verbose is False

    def test_config_file(self):
        """--config specifies config file."""
        with patch("sys.argv", ["smtplike-example", "-c", "config.yaml"]):
            args = parse_args()
            assert args.config == "config.yaml"

    def test_host_and_port(self):
        """--host and --port set the listen address."""
        with patch("sys.argv", ["smtplike-example", "--host", "127.0.0.1", "-p", "2525"]):
            args = parse_args()
            assert args.host == "127.0.0.1"
            assert args.port == 2525

    def test_port_must_be_integer(self):
        """A non-numeric port is rejected."""
        with patch("sys.argv", ["smtplike-example", "-p", "smtp"]):
            with pytest.raises(SystemExit):
                parse_args()

    def test_verbose_flag(self):
        """--verbose enables verbose mode."""
        with patch("sys.argv", ["smtplike-example", "-v"]):
            args = parse_args()
            assert args.verbose is True


class TestMain:
    """Tests for main function."""

    def test_config_file_not_found(self):
        """Returns 1 when config file not found."""
        with patch("sys.argv", ["smtplike-example", "-c", "/nonexistent/config.yaml"]):
            result = main()
            assert result == 1

    @patch("smtplike.cli.signal.signal")
    @patch("smtplike.cli.signal.pause")
    @patch("smtplike.cli.TcpListener")
    @patch("smtplike.cli.ProtocolServer")
    def test_default_config(self, mock_server, mock_listener, mock_pause, mock_signal):
        """Without options the listener uses the default address."""
        mock_pause.side_effect = Exception("exit")

        with patch("sys.argv", ["smtplike-example"]):
            main()

        mock_listener.assert_called_once_with("0.0.0.0", 1234, 16)
        args = mock_server.call_args[0]
        assert args[1] is mock_listener.return_value
        assert args[2] is ExampleContext
        assert args[3] == Config()

    @patch("smtplike.cli.signal.signal")
    @patch("smtplike.cli.signal.pause")
    @patch("smtplike.cli.TcpListener")
    @patch("smtplike.cli.ProtocolServer")
    def test_config_file_loading(self, mock_server, mock_listener, mock_pause, mock_signal, tmp_path):
        """Config file is loaded and used."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("""
server:
  host: 127.0.0.1
  port: 2525
  backlog: 8
protocol:
  encoding: latin-1
""")
        mock_pause.side_effect = Exception("exit")

        with patch("sys.argv", ["smtplike-example", "-c", str(config_file)]):
            main()

        mock_listener.assert_called_once_with("127.0.0.1", 2525, 8)
        assert mock_server.call_args[0][3].encoding == "latin-1"

    @patch("smtplike.cli.signal.signal")
    @patch("smtplike.cli.signal.pause")
    @patch("smtplike.cli.TcpListener")
    @patch("smtplike.cli.ProtocolServer")
    def test_command_line_overrides_config(self, mock_server, mock_listener, mock_pause, mock_signal, tmp_path):
        """Command line arguments override config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("""
server:
  host: 127.0.0.1
  port: 2525
""")
        mock_pause.side_effect = Exception("exit")

        with patch("sys.argv", ["smtplike-example", "-c", str(config_file), "--host", "::1", "-p", "0"]):
            main()

        mock_listener.assert_called_once_with("::1", 0, 16)

    @patch("smtplike.cli.TcpListener")
    def test_listener_init_failure(self, mock_listener):
        """Returns 1 when the listener cannot be created."""
        mock_listener.side_effect = Exception("bad address")

        with patch("sys.argv", ["smtplike-example"]):
            result = main()
            assert result == 1

    @patch("smtplike.cli.signal.signal")
    @patch("smtplike.cli.signal.pause")
    @patch("smtplike.cli.TcpListener")
    @patch("smtplike.cli.ProtocolServer")
    def test_server_start_failure(self, mock_server, mock_listener, mock_pause, mock_signal):
        """Returns 1 when server start fails."""
        mock_server_instance = MagicMock()
        mock_server_instance.start.side_effect = OSError("Address in use")
        mock_server.return_value = mock_server_instance

        with patch("sys.argv", ["smtplike-example"]):
            result = main()
            assert result == 1

        # Server should be stopped even on failure
        mock_server_instance.stop.assert_called_once()
        mock_pause.assert_not_called()

    @patch("smtplike.cli.signal.signal")
    @patch("smtplike.cli.signal.pause")
    @patch("smtplike.cli.TcpListener")
    @patch("smtplike.cli.ProtocolServer")
    def test_signal_handlers_installed(self, mock_server, mock_listener, mock_pause, mock_signal):
        """SIGINT and SIGTERM are handled."""
        import signal

        mock_pause.side_effect = Exception("exit")

        with patch("sys.argv", ["smtplike-example"]):
            main()

        signals = [c[0][0] for c in mock_signal.call_args_list]
        assert signal.SIGINT in signals
        assert signal.SIGTERM in signals

    @patch("smtplike.cli.signal.signal")
    @patch("smtplike.cli.signal.pause")
    @patch("smtplike.cli.TcpListener")
    @patch("smtplike.cli.ProtocolServer")
    def test_server_stop_called_on_exit(self, mock_server, mock_listener, mock_pause, mock_signal):
        """Server stop is called in finally block."""
        mock_server_instance = MagicMock()
        mock_server.return_value = mock_server_instance

        mock_pause.side_effect = Exception("exit")

        with patch("sys.argv", ["smtplike-example"]):
            main()

        mock_server_instance.stop.assert_called_once()
