"""Application – options, signing, webhooks and the screenshots client."""
