"""Site Admin API - visitor tracking and administration backend."""
