"""League data bot: chat commands and game-backend ingestion over one shared store."""
