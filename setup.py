from setuptools import setup

setup(
    name="xmlstreamer",
    version="1.0.0",
    description=(
        "Provides a push parser which assembles XML streams into element trees, emitting every element "
        "completed directly under the stream container, plus a one-shot parser for single fragments. "
        "Based on the expat C library."
    ),
    packages=["xmlstreamer", "xmlstreamer.expat"],
    python_requires=">=3.7",
    install_requires=["cffi>=1.15.0"],
    extras_require={"test": ["pytest"]},
)
