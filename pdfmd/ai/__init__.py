"""Vision model collaborators that turn page images into markdown."""
