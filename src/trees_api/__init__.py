"""Trees API: CRUD over trees and their insects."""
