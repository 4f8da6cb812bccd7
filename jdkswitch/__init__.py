"""Back up and rewrite the system-wide JAVA_HOME, PATH and CLASSPATH on Windows."""

__version__ = "1.0.0"