"""Link detection and embed rendering for Sketchfab model links.

Nothing in here opens sockets or reads files: metadata arrives through the
HttpClientPort and settings arrive as an EmbedConfig.
"""
