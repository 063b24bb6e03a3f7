# Centralized tooltip/help text used across the app.

EXPOSURE_MEASURES = {
    "exposure_human_gamma": "Human rating",
    "exposure_dv_gamma": "Model rating",
}

KPI_TOOLTIPS = {
    "R²": "Share of employment-weighted variance in log10(wage) explained by the trend. 0 means the line explains nothing.",
    "Slope": "Change in log10(median wage) per unit of exposure score.",
    "Wage multiple": "10^slope: how many times higher the trend wage is at exposure 1 than at exposure 0.",
    "Employment": "Occupation employment; used as the regression weight and the bubble size.",
    "Exposure": "Share of an occupation's tasks rated as exposed (gamma: full exposure plus half of partial).",
}
