"""
CFFI-based Python bindings for the subset of the Expat XML tokenizer used by xmlstreamer.
"""

import logging

from cffi import FFI

logger = logging.getLogger(__name__)

ffi = FFI()

# Define the C interface for expat
ffi.cdef(
    """
    // Opaque handle type
    typedef struct XML_ParserStruct * XML_Parser;
    typedef char XML_Char;
    typedef unsigned char XML_Bool;

    // Status codes returned by XML_Parse
    enum XML_Status {
        XML_STATUS_ERROR = 0,
        XML_STATUS_OK = 1,
        XML_STATUS_SUSPENDED = 2
    };

    // Callback function types
    typedef void (*XML_StartElementHandler)(void * userData,
                                            const XML_Char * name,
                                            const XML_Char ** atts);
    typedef void (*XML_EndElementHandler)(void * userData, const XML_Char * name);
    typedef void (*XML_CharacterDataHandler)(void * userData, const XML_Char * s, int len);

    // Core API functions
    XML_Parser XML_ParserCreate(const XML_Char * encoding);

    void XML_SetElementHandler(XML_Parser parser,
                               XML_StartElementHandler start,
                               XML_EndElementHandler end);

    void XML_SetCharacterDataHandler(XML_Parser parser, XML_CharacterDataHandler handler);

    enum XML_Status XML_Parse(XML_Parser parser, const char * s, int len, int isFinal);

    int XML_GetErrorCode(XML_Parser parser);

    const char * XML_ErrorString(int code);

    unsigned long XML_GetCurrentLineNumber(XML_Parser parser);

    unsigned long XML_GetCurrentColumnNumber(XML_Parser parser);

    void XML_ParserFree(XML_Parser parser);

    // expat >= 2.6.0 only
    XML_Bool XML_SetReparseDeferralEnabled(XML_Parser parser, XML_Bool enabled);
"""
)


def load_expat_library():
    """
    Load the expat shared library.

    First tries to load a bundled library from the package directory,
    then falls back to system-installed libraries.

    Returns:
        FFI library object with expat functions

    Raises:
        OSError: If the expat library cannot be found
    """
    import os
    import platform

    # Determine bundled library name
    system = platform.system()
    if system == "Darwin":
        bundled_name = "libexpat.dylib"
    elif system == "Windows":
        bundled_name = "libexpat.dll"
    else:  # Linux
        bundled_name = "libexpat.so.1"

    package_dir = os.path.dirname(__file__)
    bundled_path = os.path.join(package_dir, bundled_name)

    if os.path.exists(bundled_path):
        try:
            lib = ffi.dlopen(bundled_path)
            logger.debug("Loaded bundled expat from %s", bundled_path)
            return lib
        except OSError:
            logger.debug("Could not load bundled expat from %s", bundled_path, exc_info=True)

    library_names = [
        "expat",  # cffi resolves this through ctypes.util.find_library
        "libexpat.so.1",  # Linux with version
        "libexpat.dylib",  # macOS
        "libexpat.dll",  # Windows
    ]

    last_error = None
    for lib_name in library_names:
        try:
            lib = ffi.dlopen(lib_name)
            logger.debug("Loaded expat as %s", lib_name)
            return lib
        except OSError as e:
            last_error = e
            continue

    raise OSError(
        f"Expat library could not be found. Tried bundled at {bundled_path} "
        f"and system libraries: {', '.join(library_names)}. "
        f"Last error: {last_error}\n"
        "Please install it:\n"
        "  - Ubuntu/Debian: sudo apt-get install libexpat1\n"
        "  - macOS: brew install expat\n"
        "  - Fedora/RHEL: sudo yum install expat"
    )
