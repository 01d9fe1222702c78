"""LinkedIn Post Studio: request a generated post, watch it arrive, approve or discard it."""
