"""Supabase-backed secret store for API credentials."""

from dataclasses import dataclass

from supabase import Client

from fresh_keeper.services.credentials import SecretStore


@dataclass
class SupabaseSecretStore(SecretStore):
    """Stores secrets in a service-role-only ``secrets`` table."""

    client: Client

    def get(self, namespace: str, account: str) -> str | None:
        """Return a stored secret or None."""
        response = (
            self.client.table("secrets")
            .select("value")
            .eq("namespace", namespace)
            .eq("account", account)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, namespace: str, account: str, value: str) -> None:
        """Insert or replace a secret."""
        self.client.table("secrets").upsert(
            {"namespace": namespace, "account": account, "value": value},
            on_conflict="namespace,account",
        ).execute()

    def delete(self, namespace: str, account: str) -> None:
        """Remove a secret if present."""
        self.client.table("secrets").delete().eq("namespace", namespace).eq(
            "account", account
        ).execute()
