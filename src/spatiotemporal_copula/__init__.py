from spatiotemporal_copula.config import (  # noqa
    ANGULAR_FREQUENCY,
    MONTHS_PER_YEAR,
    ModelConfig,
)
from spatiotemporal_copula.exceptions import (  # noqa
    ConfigurationError,
    ConvergenceError,
    DataError,
    NumericalError,
    SpatioTemporalCopulaError,
    ValidationError,
)
from spatiotemporal_copula.likelihoods import (  # noqa
    bivariate_gaussian_copula_density,
    conditional_copula_cdf,
    joint_likelihood,
    joint_log_integrand,
    joint_log_likelihood,
    nllk_intensity,
    nllk_joint,
    nllk_occurrence,
    shifted_poisson_cdf,
    shifted_poisson_log_pmf,
    shifted_poisson_pmf,
)
from spatiotemporal_copula.objective import SpatioTemporalObjective  # noqa
from spatiotemporal_copula.parameters import (  # noqa
    JointParameters,
    LinkCoefficients,
    joint_parameter_size,
    occurrence_parameter_size,
    split_joint_parameters,
    split_link_parameters,
)
from spatiotemporal_copula.quadrature import (  # noqa
    cached_gauss_legendre,
    gauss_legendre,
)
from spatiotemporal_copula.tables import (  # noqa
    ObservationTable,
    as_center_array,
    as_observation_table,
)

__version__ = "0.1.0"
