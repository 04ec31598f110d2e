"""mathematical constants computed once here to avoid recomputation"""
import math

# general math constants
SQRT_2 = math.sqrt(2.0)
INV_SQRT_2 = 1.0 / SQRT_2
SQRT_2PI = math.sqrt(2.0 * math.pi)
INV_SQRT_2PI = 1.0 / SQRT_2PI

# Acklam's rational approximation of the normal quantile function
# central region numerator and denominator, polynomials in r = (p - 0.5)^2
ACKLAM_A = (
    -3.969683028665376e01,
    2.209460984245205e02,
    -2.759285104469687e02,
    1.383577518672690e02,
    -3.066479806614716e01,
    2.506628277459239e00,
)
ACKLAM_B = (
    -5.447609879822406e01,
    1.615858368580409e02,
    -1.556989798598866e02,
    6.680131188771972e01,
    -1.328068155288572e01,
)
# tail numerator and denominator, polynomials in q = sqrt(-2 ln p)
ACKLAM_C = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e00,
    -2.549732539343734e00,
    4.374664141464968e00,
    2.938163982698783e00,
)
ACKLAM_D = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e00,
    3.754408661907416e00,
)
P_LOW = 0.02425
P_HIGH = 1.0 - P_LOW
# largest exponent refined in Halley's step, exp overflows just above 709
MAX_EXP_ARG = 700.0

# Zelen & Severo (Abramowitz & Stegun 26.2.17) normal cdf
ZS_P = 0.2316419
ZS_B = (0.319381530, -0.356563782, 1.781477937, -1.821255978, 1.330274429)

# thurstone constants
DEFAULT_P_MIN = 0.01
DEFAULT_P_MAX = 0.99
TIE_DECIMALS = 12
