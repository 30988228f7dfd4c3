"""Propagation and link calculators."""

from .path_loss import free_space_loss
from .link_budget import link_budget
from .fresnel import fresnel_zone
from .field_strength import field_strength
