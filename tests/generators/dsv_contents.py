import hypothesis.strategies as st

separators = st.sampled_from([",", ";", "\t", "|", ":"])

fields = st.text(alphabet=st.sampled_from('ab c,;\t|:"\n\r'), max_size=8)

records = st.lists(fields, min_size=1, max_size=6)

dsv_data = st.lists(records, max_size=10)

quoted_contents = st.text(alphabet=st.sampled_from('ab,\n"'), max_size=20)
