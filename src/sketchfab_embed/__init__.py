"""sketchfab-embed: turn Sketchfab model links in HTML into inline viewers."""
