"""Entity services over the shared query cache, derived views and the booking flow."""
