"""Supabase Storage bucket for food item photos."""

from dataclasses import dataclass

from supabase import Client

from fresh_keeper.services.inventory import PhotoStore


@dataclass
class SupabasePhotoStore(PhotoStore):
    """Keeps photo blobs out of the item rows."""

    client: Client
    bucket: str

    def put(self, key: str, data: bytes) -> str:
        """Upload photo bytes and return the object path."""
        path = f"items/{key}.jpg"
        self.client.storage.from_(self.bucket).upload(
            path, data, {"content-type": "image/jpeg", "upsert": "true"}
        )
        return path

    def get(self, path: str) -> bytes | None:
        """Download photo bytes."""
        return self.client.storage.from_(self.bucket).download(path)

    def delete(self, path: str) -> None:
        """Remove a stored photo."""
        self.client.storage.from_(self.bucket).remove([path])
