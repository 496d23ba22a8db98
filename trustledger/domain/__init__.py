"""Business entities and the services that mutate them."""
