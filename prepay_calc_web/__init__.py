"""Flask front end for the prepayment calculator."""
