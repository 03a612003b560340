# =============================================================================
# ENTRY POINT TESTS
# =============================================================================
# Tests for main(): outer error handling and exit status.
# =============================================================================

from unittest.mock import MagicMock, patch

from azure.core.exceptions import HttpResponseError

from acr_sample.main import main

FULL_ENV = {
    "CLIENT_ID": "cid",
    "CLIENT_SECRET": "secret",
    "TENANT_ID": "tid",
    "SUBSCRIPTION_ID": "sub",
}


@patch("acr_sample.main.load_dotenv")
class TestMain:
    """Test main()."""

    @patch("acr_sample.main.run_sample")
    @patch("acr_sample.main.AzureClients")
    def test_success_returns_zero(self, mock_clients, mock_run, mock_dotenv):
        with patch.dict("os.environ", FULL_ENV, clear=True):
            assert main() == 0
        mock_run.assert_called_once()
        mock_clients.return_value.close.assert_called_once()

    @patch("acr_sample.main.run_sample")
    @patch("acr_sample.main.AzureClients")
    def test_failure_logged_and_returns_one(self, mock_clients, mock_run, mock_dotenv):
        mock_run.side_effect = HttpResponseError("resource group creation failed")

        with patch.dict("os.environ", FULL_ENV, clear=True):
            assert main() == 1
        mock_clients.return_value.close.assert_called_once()

    @patch("acr_sample.main.run_sample")
    @patch("acr_sample.main.AzureClients")
    def test_missing_credentials_returns_one(self, mock_clients, mock_run, mock_dotenv):
        with patch.dict("os.environ", {}, clear=True):
            assert main() == 1
        mock_clients.assert_not_called()
        mock_run.assert_not_called()

    @patch("acr_sample.main.run_sample")
    @patch("acr_sample.main.AzureClients")
    def test_loads_dotenv(self, mock_clients, mock_run, mock_dotenv):
        with patch.dict("os.environ", FULL_ENV, clear=True):
            main()
        mock_dotenv.assert_called_once()
