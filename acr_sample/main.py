# -----------------------------------------------------------------------------
# ACR SAMPLE - ENTRY POINT
# -----------------------------------------------------------------------------
# Responsibility: Authenticate, load settings and run the sample once.
#
# Takes no arguments. Service principal comes from the environment:
#   CLIENT_ID, CLIENT_SECRET, TENANT_ID, SUBSCRIPTION_ID
# A .env file at the project root is loaded first if present.
#
# Any failure is logged and turned into exit status 1.
# -----------------------------------------------------------------------------

import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from acr_sample.core.sample import run_sample
from acr_sample.core.settings import AzureCredentials, load_settings
from acr_sample.infra.azure_client import AzureClients

PROJECT_ROOT = Path(__file__).parent.parent

console = Console()


def main() -> int:
    """Run the sample; return the process exit status."""
    load_dotenv(PROJECT_ROOT / ".env")

    clients: AzureClients | None = None
    try:
        settings = load_settings()
        clients = AzureClients(AzureCredentials.from_env())
        run_sample(clients, settings)
        return 0
    except Exception as e:
        console.print(
            Panel(
                f"[bold red]{type(e).__name__}: {e}[/bold red]",
                title="SAMPLE FAILED",
                border_style="red",
            )
        )
        return 1
    finally:
        if clients is not None:
            clients.close()


if __name__ == "__main__":
    sys.exit(main())
