# =============================================================================
# AZURE CLIENTS TESTS
# =============================================================================
# Tests for the lazily-built Azure management clients.
# =============================================================================

from unittest.mock import MagicMock, patch

from acr_sample.core.settings import AzureCredentials

CREDS = AzureCredentials(
    client_id="cid", client_secret="secret", tenant_id="tid", subscription_id="sub"
)


class TestAzureClients:
    """Test AzureClients."""

    @patch("acr_sample.infra.azure_client.ClientSecretCredential")
    def test_credential_built_from_service_principal(self, mock_cred):
        from acr_sample.infra.azure_client import AzureClients

        clients = AzureClients(CREDS)
        mock_cred.assert_called_once_with(tenant_id="tid", client_id="cid", client_secret="secret")
        assert clients.subscription_id == "sub"

    @patch("acr_sample.infra.azure_client.ResourceManagementClient")
    @patch("acr_sample.infra.azure_client.ClientSecretCredential")
    def test_clients_created_lazily_once(self, mock_cred, mock_resource):
        from acr_sample.infra.azure_client import AzureClients

        clients = AzureClients(CREDS)
        mock_resource.assert_not_called()

        first = clients.resources
        second = clients.resources
        assert first is second
        mock_resource.assert_called_once_with(mock_cred.return_value, "sub")

    @patch("acr_sample.infra.azure_client.ComputeManagementClient")
    @patch("acr_sample.infra.azure_client.NetworkManagementClient")
    @patch("acr_sample.infra.azure_client.ContainerRegistryManagementClient")
    @patch("acr_sample.infra.azure_client.ClientSecretCredential")
    def test_close_closes_created_clients(self, mock_cred, mock_acr, mock_net, mock_compute):
        from acr_sample.infra.azure_client import AzureClients

        clients = AzureClients(CREDS)
        clients.registries
        clients.close()

        mock_acr.return_value.close.assert_called_once()
        mock_net.return_value.close.assert_not_called()
        mock_compute.return_value.close.assert_not_called()
        mock_cred.return_value.close.assert_called_once()

    @patch("acr_sample.infra.azure_client.NetworkManagementClient")
    @patch("acr_sample.infra.azure_client.ResourceManagementClient")
    @patch("acr_sample.infra.azure_client.ClientSecretCredential")
    def test_failing_client_close_does_not_leak_others(self, mock_cred, mock_resource, mock_net):
        from acr_sample.infra.azure_client import AzureClients

        mock_resource.return_value.close.side_effect = RuntimeError("transport already closed")

        clients = AzureClients(CREDS)
        clients.resources
        clients.network
        clients.close()

        mock_net.return_value.close.assert_called_once()
        mock_cred.return_value.close.assert_called_once()
