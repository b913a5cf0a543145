"""Chart composition core: attributes, events, animation, data and control."""
