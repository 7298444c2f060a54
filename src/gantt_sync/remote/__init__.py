"""List store adapters (SharePoint REST, offline demo list)."""
