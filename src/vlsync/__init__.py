"""
vlsync - video players and clickable timestamps for markdown notes.

Commands:
    insert-video-iframe-from-clipboard   # Embed a YouTube/Bilibili link + metadata
    selection-to-video-timestamp         # Turn "1:23 caption" into a timestamp marker
"""

__version__ = "0.1.0"
