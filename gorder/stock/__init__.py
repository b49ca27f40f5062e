"""The stock service: item lookup and stock checks."""