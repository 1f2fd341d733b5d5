"""Client data façade for the ProjectDesk HTTP API."""
