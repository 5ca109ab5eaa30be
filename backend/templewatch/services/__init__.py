"""Domain services: booking API client, aggregation, discovery (diff + snapshot), auth and notifications."""
