"""Flutter Scaffold -- generates Flutter feature folder trees and Dart stubs."""

__version__ = "0.1.0"
