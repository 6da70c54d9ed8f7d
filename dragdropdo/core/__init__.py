"""dragdropdo core: transport, uploads, operations and status polling."""
