from collections.abc import Callable

from spatiotemporal_copula.likelihoods.copula import (  # noqa
    bivariate_gaussian_copula_density,
    conditional_copula_cdf,
)
from spatiotemporal_copula.likelihoods.intensity import (  # noqa
    intensity_nllk_from_basis,
    nllk_intensity,
)
from spatiotemporal_copula.likelihoods.joint import (  # noqa
    joint_likelihood,
    joint_likelihood_from_basis,
    joint_log_integrand,
    joint_log_likelihood,
    joint_log_likelihood_from_basis,
    joint_nllk_from_basis,
    nllk_joint,
)
from spatiotemporal_copula.likelihoods.occurrence import (  # noqa
    nllk_occurrence,
    occurrence_nllk_from_basis,
)
from spatiotemporal_copula.likelihoods.shifted_poisson import (  # noqa
    shifted_poisson_cdf,
    shifted_poisson_log_pmf,
    shifted_poisson_pmf,
)

_STANDALONE_OBJECTIVES: dict[str, Callable] = {
    "occurrence": occurrence_nllk_from_basis,
    "intensity": intensity_nllk_from_basis,
}
_JOINT_OBJECTIVES: dict[str, Callable] = {
    "joint": joint_likelihood_from_basis,
    "joint_nllk": joint_nllk_from_basis,
}
