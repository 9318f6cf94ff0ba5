"""
Core service interfaces package.

Contracts for the external collaborators of the assessment engine. Concrete
implementations live in the infrastructure layer.
"""
