"""Vulkan result codes: classification, descriptions and checking."""

from __future__ import annotations

from enum import IntEnum


class VkResult(IntEnum):
    """Result codes returned by Vulkan calls."""

    SUCCESS = 0
    NOT_READY = 1
    TIMEOUT = 2
    EVENT_SET = 3
    EVENT_RESET = 4
    INCOMPLETE = 5
    SUBOPTIMAL_KHR = 1000001003
    THREAD_IDLE_KHR = 1000268000
    THREAD_DONE_KHR = 1000268001
    OPERATION_DEFERRED_KHR = 1000268002
    OPERATION_NOT_DEFERRED_KHR = 1000268003
    PIPELINE_COMPILE_REQUIRED_EXT = 1000297000
    ERROR_OUT_OF_HOST_MEMORY = -1
    ERROR_OUT_OF_DEVICE_MEMORY = -2
    ERROR_INITIALIZATION_FAILED = -3
    ERROR_DEVICE_LOST = -4
    ERROR_MEMORY_MAP_FAILED = -5
    ERROR_LAYER_NOT_PRESENT = -6
    ERROR_EXTENSION_NOT_PRESENT = -7
    ERROR_FEATURE_NOT_PRESENT = -8
    ERROR_INCOMPATIBLE_DRIVER = -9
    ERROR_TOO_MANY_OBJECTS = -10
    ERROR_FORMAT_NOT_SUPPORTED = -11
    ERROR_FRAGMENTED_POOL = -12
    ERROR_UNKNOWN = -13
    ERROR_OUT_OF_POOL_MEMORY = -1000069000
    ERROR_INVALID_EXTERNAL_HANDLE = -1000072003
    ERROR_FRAGMENTATION = -1000161000
    ERROR_INVALID_DEVICE_ADDRESS_EXT = -1000257000
    ERROR_SURFACE_LOST_KHR = -1000000000
    ERROR_NATIVE_WINDOW_IN_USE_KHR = -1000000001
    ERROR_OUT_OF_DATE_KHR = -1000001004
    ERROR_INCOMPATIBLE_DISPLAY_KHR = -1000003001
    ERROR_INVALID_SHADER_NV = -1000012000
    ERROR_FULL_SCREEN_EXCLUSIVE_MODE_LOST_EXT = -1000255000


_DESCRIPTIONS = {
    VkResult.SUCCESS: "Command successfully completed",
    VkResult.NOT_READY: "A fence or query has not yet completed",
    VkResult.TIMEOUT: "A wait operation has not completed in the specified time",
    VkResult.EVENT_SET: "An event is signaled",
    VkResult.EVENT_RESET: "An event is unsignaled",
    VkResult.INCOMPLETE: "A return array was too small for the result",
    VkResult.SUBOPTIMAL_KHR: (
        "A swapchain no longer matches the surface properties exactly, "
        "but can still be used to present to the surface successfully."
    ),
    VkResult.THREAD_IDLE_KHR: (
        "A deferred operation is not complete but there is currently no work "
        "for this thread to do at the time of this call."
    ),
    VkResult.THREAD_DONE_KHR: (
        "A deferred operation is not complete but there is no work remaining "
        "to assign to additional threads."
    ),
    VkResult.OPERATION_DEFERRED_KHR: (
        "A deferred operation was requested and at least some of the work was deferred."
    ),
    VkResult.OPERATION_NOT_DEFERRED_KHR: (
        "A deferred operation was requested and no operations were deferred."
    ),
    VkResult.PIPELINE_COMPILE_REQUIRED_EXT: (
        "A requested pipeline creation would have required compilation, "
        "but the application requested compilation to not be performed."
    ),
    VkResult.ERROR_OUT_OF_HOST_MEMORY: "A host memory allocation has failed.",
    VkResult.ERROR_OUT_OF_DEVICE_MEMORY: "A device memory allocation has failed.",
    VkResult.ERROR_INITIALIZATION_FAILED: (
        "Initialization of an object could not be completed for "
        "implementation-specific reasons."
    ),
    VkResult.ERROR_DEVICE_LOST: (
        "The logical or physical device has been lost. See Lost Device"
    ),
    VkResult.ERROR_MEMORY_MAP_FAILED: "Mapping of a memory object has failed.",
    VkResult.ERROR_LAYER_NOT_PRESENT: (
        "A requested layer is not present or could not be loaded."
    ),
    VkResult.ERROR_EXTENSION_NOT_PRESENT: "A requested extension is not supported.",
    VkResult.ERROR_FEATURE_NOT_PRESENT: "A requested feature is not supported.",
    VkResult.ERROR_INCOMPATIBLE_DRIVER: (
        "The requested version of Vulkan is not supported by the driver or is "
        "otherwise incompatible for implementation-specific reasons."
    ),
    VkResult.ERROR_TOO_MANY_OBJECTS: (
        "Too many objects of the type have already been created."
    ),
    VkResult.ERROR_FORMAT_NOT_SUPPORTED: (
        "A requested format is not supported on this device."
    ),
    VkResult.ERROR_FRAGMENTED_POOL: (
        "A pool allocation has failed due to fragmentation of the pool’s memory. "
        "This must only be returned if no attempt to allocate host or device memory "
        "was made to accommodate the new allocation. This should be returned in "
        "preference to VK_ERROR_OUT_OF_POOL_MEMORY, but only if the implementation "
        "is certain that the pool allocation failure was due to fragmentation."
    ),
    VkResult.ERROR_SURFACE_LOST_KHR: "A surface is no longer available.",
    VkResult.ERROR_NATIVE_WINDOW_IN_USE_KHR: (
        "The requested window is already in use by Vulkan or another API in a "
        "manner which prevents it from being used again."
    ),
    VkResult.ERROR_OUT_OF_DATE_KHR: (
        "A surface has changed in such a way that it is no longer compatible with "
        "the swapchain, and further presentation requests using the swapchain will "
        "fail. Applications must query the new surface properties and recreate "
        "their swapchain if they wish to continue presenting to the surface."
    ),
    VkResult.ERROR_INCOMPATIBLE_DISPLAY_KHR: (
        "The display used by a swapchain does not use the same presentable image "
        "layout, or is incompatible in a way that prevents sharing an image."
    ),
    VkResult.ERROR_INVALID_SHADER_NV: (
        "One or more shaders failed to compile or link. More details are reported "
        "back to the application via VK_EXT_debug_report if enabled."
    ),
    VkResult.ERROR_OUT_OF_POOL_MEMORY: (
        "A pool memory allocation has failed. This must only be returned if no "
        "attempt to allocate host or device memory was made to accommodate the new "
        "allocation. If the failure was definitely due to fragmentation of the "
        "pool, VK_ERROR_FRAGMENTED_POOL should be returned instead."
    ),
    VkResult.ERROR_INVALID_EXTERNAL_HANDLE: (
        "An external handle is not a valid handle of the specified type."
    ),
    VkResult.ERROR_FRAGMENTATION: (
        "A descriptor pool creation has failed due to fragmentation."
    ),
    VkResult.ERROR_INVALID_DEVICE_ADDRESS_EXT: (
        "A buffer creation failed because the requested address is not available."
    ),
    VkResult.ERROR_FULL_SCREEN_EXCLUSIVE_MODE_LOST_EXT: (
        "An operation on a swapchain created with "
        "VK_FULL_SCREEN_EXCLUSIVE_APPLICATION_CONTROLLED_EXT failed as it did not "
        "have exlusive full-screen access. This may occur due to "
        "implementation-dependent reasons, outside of the application’s control."
    ),
    VkResult.ERROR_UNKNOWN: (
        "An unknown error has occurred; either the application has provided "
        "invalid input, or an implementation failure has occurred."
    ),
}


def _known(result: int) -> VkResult:
    """The matching code; unrecognised values are treated as success."""
    try:
        return VkResult(int(result))
    except ValueError:
        return VkResult.SUCCESS


class VulkanError(RuntimeError):
    """Raised by :func:`check` when a call did not return success."""

    def __init__(self, result: int) -> None:
        self.result = int(result)
        try:
            name = f"VK_{VkResult(self.result).name}"
        except ValueError:
            name = f"VkResult {self.result}"
        super().__init__(f"Vulkan call failed: {name}")


def is_vulkan_result_success(result: int) -> bool:
    """False for error codes; true for success codes and unknown values."""
    return _known(result) >= 0


def vulkan_result_string(result: int, extended: bool = False) -> str:
    """Name of the code, optionally followed by its description.

    Unknown values are reported as success.
    """
    code = _known(result)
    name = f"VK_{code.name}"
    if not extended:
        return name
    return f"{name} {_DESCRIPTIONS[code]}"


def check(result: int) -> VkResult:
    """Return the code if it is SUCCESS, otherwise raise :class:`VulkanError`."""
    if int(result) != VkResult.SUCCESS:
        raise VulkanError(result)
    return VkResult.SUCCESS