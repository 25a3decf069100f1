"""Engine building blocks: events, input, clock, logging, files, strings, freelist, transforms, render types, camera and Vulkan result codes."""

__version__ = "0.1.0"