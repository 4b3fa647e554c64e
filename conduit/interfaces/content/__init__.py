"""HTTP interface for the content bounded context."""
