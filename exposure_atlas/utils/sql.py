# Modeled tables built on top of raw_occupations (shared by the app bootstrap and scripts).

FCT_OCCUPATIONS_SQL = """
CREATE OR REPLACE TABLE fct_occupations AS
SELECT
  trim(soc_code)                                   AS soc_code,
  soc_title,
  employment::DOUBLE                               AS employment,
  median_annual_wage::DOUBLE                       AS median_annual_wage,
  CASE WHEN median_annual_wage > 0
       THEN log10(median_annual_wage::DOUBLE) END  AS log_median_annual_wage,
  exposure_human_gamma::DOUBLE                     AS exposure_human_gamma,
  exposure_dv_gamma::DOUBLE                        AS exposure_dv_gamma,
  soc_exposure_count::INTEGER                      AS soc_exposure_count,
  nullif(trim(education), '')                      AS education
FROM raw_occupations
WHERE soc_code IS NOT NULL;
"""
